"""
High-level use cases for the business card API.

Each service module orchestrates repositories/adapters to implement the
editing rules (load the draft, commit it, manage links, upload avatars).

Routers (FastAPI endpoints) call these services instead of touching the
database session or blob storage directly.
"""
