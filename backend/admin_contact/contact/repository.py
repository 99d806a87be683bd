# backend/admin_contact/contact/repository.py

"""
送信ワークフローが使うストア操作のインターフェースと実装。

- AdminResolver: 宛先候補（role=admin のプロフィール）を取得する
- NotificationWriter: 通知レコードを 1 件永続化する

SubmissionController はこの 2 つの能力だけを受け取り、
ストアのクライアントを直接参照しない。
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Protocol

from pydantic import ValidationError

from admin_contact.store.client import SupabaseClient, SupabaseClientError

from .errors import LookupFailure, WriteFailure
from .schemas import (
    NOTIFICATIONS_TABLE,
    PROFILES_TABLE,
    Notification,
    NotificationDraft,
    Profile,
    UserRole,
)

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id,email,full_name,role"


class AdminResolver(Protocol):
    """
    宛先候補の取得インターフェース。

    返り値の順序は保証しない（呼び出しごとに変わりうる）。空リストもありうる。
    """

    async def find_admins(self) -> List[Profile]:  # pragma: no cover - Protocol
        ...


class NotificationWriter(Protocol):
    """
    通知レコードの永続化インターフェース。

    成功時はちょうど 1 件 insert し、失敗時は WriteFailure（何も残らない）。
    """

    async def create(self, draft: NotificationDraft) -> Notification:  # pragma: no cover - Protocol
        ...


class SupabaseAdminResolver:
    """profiles テーブルを role=admin で絞り込む AdminResolver。"""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def find_admins(self) -> List[Profile]:
        try:
            rows = await self._client.select(
                PROFILES_TABLE,
                columns=PROFILE_COLUMNS,
                filters={"role": UserRole.ADMIN.value},
            )
            return [Profile.model_validate(row) for row in rows]
        except (SupabaseClientError, ValidationError) as exc:
            logger.error("Admin lookup failed: %s", exc)
            raise LookupFailure() from exc


class SupabaseNotificationWriter:
    """notifications テーブルに 1 行 insert する NotificationWriter。"""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def create(self, draft: NotificationDraft) -> Notification:
        try:
            row = await self._client.insert(NOTIFICATIONS_TABLE, draft.to_row())
        except SupabaseClientError as exc:
            logger.error("Notification insert failed: %s", exc)
            raise WriteFailure() from exc

        # ここから先は行がコミット済み。WriteFailure にはしない。
        return Notification.from_row(row, draft)


class InMemoryContactStore:
    """
    テスト・開発用のインメモリストア。

    - AdminResolver / NotificationWriter の両方を実装する
    - 未知の recipient_id への insert は外部キー違反として WriteFailure
    - fail_lookup / fail_write で障害を再現できる
    - lookup_calls / write_calls で呼び出し回数を確認できる
    """

    def __init__(
        self,
        profiles: Optional[Iterable[Profile]] = None,
        *,
        fail_lookup: bool = False,
        fail_write: bool = False,
    ) -> None:
        self.profiles: List[Profile] = list(profiles or [])
        self.notifications: List[Notification] = []
        self.fail_lookup = fail_lookup
        self.fail_write = fail_write
        self.lookup_calls = 0
        self.write_calls = 0

    async def find_admins(self) -> List[Profile]:
        self.lookup_calls += 1
        if self.fail_lookup:
            raise LookupFailure()
        return [p for p in self.profiles if p.role == UserRole.ADMIN]

    async def create(self, draft: NotificationDraft) -> Notification:
        self.write_calls += 1
        if self.fail_write:
            raise WriteFailure()
        if not any(p.id == draft.recipient_id for p in self.profiles):
            logger.error("Notification insert rejected: unknown recipient %s", draft.recipient_id)
            raise WriteFailure()

        notification = Notification(
            id=str(uuid.uuid4()),
            title=draft.title,
            message=draft.message,
            recipient_id=draft.recipient_id,
            type=draft.type,
            related_id=draft.related_id,
            related_table=draft.related_table,
            created_at=datetime.now(timezone.utc),
        )
        self.notifications.append(notification)
        return notification
