# backend/admin_contact/store/config.py

"""
Supabase 接続に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass

from admin_contact.utils.config import get_env, get_env_float


@dataclass(frozen=True)
class StoreSettings:
    """Supabase (PostgREST) 用の設定値コンテナ。"""

    url: str
    api_key: str
    timeout_seconds: float = 10.0

    @property
    def rest_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1"


def get_store_settings() -> StoreSettings:
    """
    環境変数から Supabase 設定を読み込む。

    必須:
      - SUPABASE_URL
      - SUPABASE_KEY

    任意:
      - SUPABASE_TIMEOUT_SECONDS（デフォルト 10 秒）
    """
    url = get_env("SUPABASE_URL")
    api_key = get_env("SUPABASE_KEY")
    timeout_seconds = get_env_float("SUPABASE_TIMEOUT_SECONDS", default=10.0)

    return StoreSettings(
        url=url,
        api_key=api_key,
        timeout_seconds=timeout_seconds,
    )
