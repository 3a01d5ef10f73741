"""Digital business card editor backend."""
