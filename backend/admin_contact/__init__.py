# backend/admin_contact/__init__.py
"""
Admin contact backend package.

This package contains:
- main: FastAPI application entrypoint
- contact: the submission workflow (resolve admin, write notification)
- store: Supabase (PostgREST) access
- utils: environment variable helpers
"""
