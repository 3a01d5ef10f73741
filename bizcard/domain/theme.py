"""Theme, shape and layout value objects for a business card."""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from bizcard.services.errors import InvalidLayoutValueError, InvalidShapeError, InvalidThemeValueError

HEX_COLOR_RE = re.compile(r"#([0-9a-fA-F]{6})")
BARE_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")

FONTS = (
    "Inter",
    "Roboto",
    "Open Sans",
    "Lato",
    "Montserrat",
    "Source Sans Pro",
    "Raleway",
    "Poppins",
    "Nunito",
    "Playfair Display",
)
LAYOUT_STYLES = ("modern", "classic", "minimal", "creative")
ALIGNMENTS = ("left", "center", "right")


class CardShape(str, Enum):
    RECTANGLE = "rectangle"
    ROUNDED = "rounded"
    CIRCLE = "circle"
    HEXAGON = "hexagon"


class ThemeColor(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BACKGROUND = "background"
    TEXT = "text"


class LayoutKey(str, Enum):
    STYLE = "style"
    ALIGNMENT = "alignment"
    FONT = "font"


def normalize_hex_color(value: str | None) -> str:
    """Return `#RRGGBB` in upper case, or raise InvalidThemeValueError."""
    v = (value or "").strip()
    if HEX_COLOR_RE.fullmatch(v):
        return v.upper()
    if BARE_HEX_RE.fullmatch(v):
        return ("#" + v).upper()
    raise InvalidThemeValueError(f"Invalid color value: {value!r}")


def parse_shape(value: str | CardShape | None) -> CardShape:
    try:
        return CardShape(value)
    except ValueError as exc:
        raise InvalidShapeError(f"Unknown card shape: {value!r}") from exc


@dataclass(frozen=True)
class Theme:
    primary: str = "#3B82F6"
    secondary: str = "#1E40AF"
    background: str = "#FFFFFF"
    text: str = "#1F2937"

    def with_color(self, key: ThemeColor, value: str) -> "Theme":
        if not isinstance(key, ThemeColor):
            raise TypeError(f"Theme key must be a ThemeColor, got {key!r}")
        return replace(self, **{key.value: normalize_hex_color(value)})

    def to_dict(self) -> dict:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "background": self.background,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Theme":
        """Build from stored JSON; missing or malformed keys keep their defaults."""
        theme = cls()
        for key in ThemeColor:
            raw = (data or {}).get(key.value)
            if not raw:
                continue
            try:
                theme = theme.with_color(key, raw)
            except InvalidThemeValueError:
                continue
        return theme


@dataclass(frozen=True)
class Layout:
    style: str = "modern"
    alignment: str = "center"
    font: str = "Inter"

    def with_value(self, key: LayoutKey, value: str) -> "Layout":
        if not isinstance(key, LayoutKey):
            raise TypeError(f"Layout key must be a LayoutKey, got {key!r}")
        v = (value or "").strip()
        allowed = {
            LayoutKey.STYLE: LAYOUT_STYLES,
            LayoutKey.ALIGNMENT: ALIGNMENTS,
            LayoutKey.FONT: FONTS,
        }[key]
        if v not in allowed:
            raise InvalidLayoutValueError(f"Invalid {key.value}: {value!r}")
        return replace(self, **{key.value: v})

    def to_dict(self) -> dict:
        return {"style": self.style, "alignment": self.alignment, "font": self.font}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Layout":
        layout = cls()
        for key in LayoutKey:
            raw = (data or {}).get(key.value)
            if not raw:
                continue
            try:
                layout = layout.with_value(key, raw)
            except InvalidLayoutValueError:
                continue
        return layout
