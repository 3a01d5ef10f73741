"""Social platform catalogue and profile URL derivation."""
from __future__ import annotations

from dataclasses import dataclass

GENERIC_BASE_URL = "https://"

SOCIAL_PLATFORMS = {
    "Instagram": "https://instagram.com/",
    "LinkedIn": "https://linkedin.com/in/",
    "GitHub": "https://github.com/",
    "Twitter": "https://twitter.com/",
    "Facebook": "https://facebook.com/",
    "You Tube": "https://youtube.com/@",
    "Website": "https://",
}

DEFAULT_PLATFORM = "Instagram"


def base_url(platform: str | None) -> str:
    return SOCIAL_PLATFORMS.get(platform or "", GENERIC_BASE_URL)


def derive_url(platform: str | None, username: str | None) -> str:
    """Profile URL for a handle; unknown platforms fall back to https://."""
    return base_url(platform) + (username or "")


@dataclass
class NewLinkForm:
    """
    State of the "add social link" form.

    Changing the platform or the username re-derives the URL every time, even
    when the URL was edited by hand before. Editing the URL directly keeps the
    typed value until the next platform/username change. With an empty
    username the URL is left as it is.
    """

    platform: str = DEFAULT_PLATFORM
    username: str = ""
    url: str = ""

    def set_platform(self, platform: str) -> None:
        self.platform = (platform or "").strip() or DEFAULT_PLATFORM
        self._rederive()

    def set_username(self, username: str) -> None:
        self.username = username or ""
        self._rederive()

    def set_url(self, url: str) -> None:
        self.url = url or ""

    def reset(self) -> None:
        self.platform = DEFAULT_PLATFORM
        self.username = ""
        self.url = ""

    def _rederive(self) -> None:
        if self.username:
            self.url = derive_url(self.platform, self.username)
