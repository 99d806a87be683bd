# backend/admin_contact/store/__init__.py

"""
リレーショナルストア（Supabase / PostgREST）アクセス用モジュール群。

- config: 接続先 URL・API キー・タイムアウトの設定値
- client: PostgREST の select / insert を行う非同期 HTTP クライアント
"""

from .client import (  # noqa: F401
    SupabaseClient,
    SupabaseClientError,
    SupabaseConnectionError,
    SupabaseHTTPError,
)
from .config import StoreSettings, get_store_settings  # noqa: F401
