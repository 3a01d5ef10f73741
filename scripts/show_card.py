#!/usr/bin/env python3
"""
Print the card owned by a user, its social links and its public link.

Usage:
  python scripts/show_card.py --user-id 0b6c... [--unpublish]
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from bizcard.core.logging import configure_logging
from bizcard.domain.visibility import public_url
from bizcard.services.card_gateway import CardGateway


def main() -> None:
    ap = argparse.ArgumentParser(description="Show (and optionally unpublish) a user's business card")
    ap.add_argument("--user-id", required=True, help="Owner id as issued by the identity provider")
    ap.add_argument("--unpublish", action="store_true", help="Set is_published to false and save")
    args = ap.parse_args()

    configure_logging()
    gateway = CardGateway()
    user_id = (args.user_id or "").strip()
    if not user_id:
        raise SystemExit("Invalid user id")
    card, links = gateway.load(user_id)
    if not card:
        raise SystemExit(f"No card for user '{user_id}'")

    if args.unpublish and card.is_published:
        card = gateway.commit(replace(card, is_published=False), user_id)

    print(f"Card: {card.card_id}")
    print(f"  Title: {card.title or '-'}")
    print(f"  Company: {card.company or '-'}")
    print(f"  Published: {'yes' if card.is_published else 'no'}")
    print(f"  Public URL: {public_url(card, absolute=True) or '-'}")
    for link in links:
        print(f"  {link.platform}: {link.url}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
