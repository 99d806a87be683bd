# backend/tests/conftest.py
"""
Pytest configuration for Admin Contact backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import admin_contact.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (e.g., SUPABASE_URL, SUPABASE_KEY).
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy environment variables required for tests.

    These values are only for local testing and do NOT contain real secrets.
    """
    os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
    os.environ.setdefault("SUPABASE_KEY", "dummy-supabase-key-for-tests")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"
