"""
Core utilities shared across the business card API.

This package hosts:
- configuration helpers (env vars, paths, upload limits)
- cross-cutting services such as logging, password hashing and rate limiting

Services and routers depend on these primitives instead of reading
os.environ or configuring handlers themselves.
"""
