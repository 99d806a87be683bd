# backend/admin_contact/utils/config.py

"""
環境変数読み取り用のユーティリティ。
store（Supabase 接続）と contact（送信ワークフロー）の両方で共通利用する。
"""

import os
from typing import Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を前後の空白を除いて取得する。

    Supabase のキーを .env に貼り付けた際の末尾改行などはここで落とす。
    空白のみの値は未設定とみなす。

    :param name: 環境変数名
    :param default: required=False で未設定のときに返す値
    :param required: True の場合、未設定なら EnvVarMissingError
    """
    value = (os.getenv(name) or "").strip()

    if not value:
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_float(name: str, default: float) -> float:
    """
    浮動小数点数の環境変数を取得するヘルパー。

    未設定なら default、不正な値なら RuntimeError。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return float(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(
            f"Invalid float value for env var {name}: {raw!r}"
        ) from exc
