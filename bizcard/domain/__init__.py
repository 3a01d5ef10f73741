"""Pure domain helpers (theme/layout values, social link URLs, visibility)."""
