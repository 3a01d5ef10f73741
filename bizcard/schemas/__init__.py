"""Request bodies accepted by the JSON endpoints."""
