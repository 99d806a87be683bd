# backend/admin_contact/store/client.py

"""
Supabase (PostgREST) との通信を担当する非同期クライアントモジュール。

このクライアントはテーブル名とフィルタしか知らない。
profiles / notifications の意味づけは contact.repository 側で行う。
"""

from typing import Any, Dict, List, Mapping, Optional

import httpx

from .config import StoreSettings, get_store_settings


class SupabaseClientError(Exception):
    """Supabase クライアント全般の基底例外。"""


class SupabaseHTTPError(SupabaseClientError):
    """HTTP ステータスコードがエラーだった場合の例外（制約違反もここに含まれる）。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Supabase API error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class SupabaseConnectionError(SupabaseClientError):
    """接続エラー・タイムアウト時の例外。"""


class SupabaseClient:
    """
    PostgREST の薄いラッパークライアント。

    - select: GET /rest/v1/<table>?select=...&<col>=eq.<value>
    - insert: POST /rest/v1/<table>（Prefer: return=representation）

    すべての呼び出しに settings.timeout_seconds のタイムアウトを課す。
    transport はテストで httpx.MockTransport を差し込むためのもの。
    """

    def __init__(
        self,
        settings: StoreSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_store_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.rest_url

    @property
    def timeout(self) -> float:
        return self._settings.timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        """
        PostgREST 呼び出しに使用する HTTP ヘッダを構築する。
        """
        return {
            "apikey": self._settings.api_key,
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
        }

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._build_headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """
        ステータスを確認し、JSON ボディを返す。
        """
        if response.status_code // 100 != 2:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise SupabaseHTTPError(status_code=response.status_code, body=body)

        try:
            return response.json()
        except ValueError as exc:
            raise SupabaseClientError(
                f"Unexpected non-JSON response from Supabase: {response.text!r}"
            ) from exc

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        テーブルから行を取得する。

        :param filters: {列名: 値} の等価フィルタ。PostgREST の eq 演算子に変換する。
        :raises SupabaseHTTPError: 4xx/5xx が返った場合。
        :raises SupabaseConnectionError: 接続エラーやタイムアウト時。
        """
        params: Dict[str, str] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"

        try:
            async with self._build_client() as client:
                response = await client.get(f"/{table}", params=params)
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise SupabaseConnectionError(str(exc)) from exc

        rows = self._decode(response)
        if not isinstance(rows, list):
            raise SupabaseClientError(
                f"Unexpected Supabase response format for '{table}': not a list."
            )
        return rows

    async def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        """
        1 行を insert し、ストア側で採番された列を含む行を返す。

        :raises SupabaseHTTPError: 制約違反などで 4xx/5xx が返った場合。
        :raises SupabaseConnectionError: 接続エラーやタイムアウト時。
        """
        headers = {"Prefer": "return=representation"}

        try:
            async with self._build_client() as client:
                response = await client.post(f"/{table}", json=[dict(row)], headers=headers)
        except httpx.RequestError as exc:
            raise SupabaseConnectionError(str(exc)) from exc

        rows = self._decode(response)
        if not isinstance(rows, list) or not rows or not isinstance(rows[0], dict):
            raise SupabaseClientError(
                f"Unexpected Supabase response format for insert into '{table}'."
            )
        return rows[0]
