# backend/admin_contact/contact/schemas.py

"""
管理者への問い合わせワークフローで扱うスキーマ定義。

- Profile: 登録ユーザー（profiles テーブルの 1 行）
- NotificationDraft / Notification: 永続化前後の通知レコード
- ContactAdminRequest / ContactAdminResponse: /contact/admin の入出力
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


PROFILES_TABLE = "profiles"
NOTIFICATIONS_TABLE = "notifications"


class UserRole(str, Enum):
    """profiles.role の値。ADMIN のみが問い合わせの宛先になれる。"""

    ADMIN = "admin"
    NURSE = "nurse"


class NotificationType(str, Enum):
    """
    notifications.type の値。

    このワークフローが作るのは ADMIN_CONTACT のみ。
    その他は通知センター側で使われる種別。
    """

    ADMIN_CONTACT = "admin_contact"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class ErrorKind(str, Enum):
    """送信失敗の種別。"""

    VALIDATION_FAILURE = "validation_failure"
    LOOKUP_FAILURE = "lookup_failure"
    NO_ADMIN_AVAILABLE = "no_admin_available"
    WRITE_FAILURE = "write_failure"


class SubmissionState(str, Enum):
    """1 回分の送信処理の状態。"""

    IDLE = "idle"
    VALIDATING = "validating"
    RESOLVING_RECIPIENT = "resolving_recipient"
    WRITING = "writing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Profile(BaseModel):
    """
    profiles テーブルの 1 行。

    email などが欠けていても role が admin なら宛先として扱う。
    """

    id: str = Field(..., description="プロフィール ID")
    email: Optional[str] = Field(None, description="連絡先メールアドレス（参考情報）")
    full_name: Optional[str] = Field(None, description="氏名（参考情報）")
    role: UserRole = Field(..., description="ユーザーのロール")


class NotificationDraft(BaseModel):
    """
    まだ永続化されていない通知レコード。

    必須項目の空チェックは呼び出し側（SubmissionController）の責務。
    """

    title: str
    message: str
    recipient_id: str
    type: NotificationType = NotificationType.ADMIN_CONTACT
    related_id: Optional[str] = None
    related_table: Optional[str] = None

    def to_row(self) -> dict:
        """notifications テーブルへの insert 用の行に変換する（宛先列は user_id）。"""
        return {
            "title": self.title,
            "message": self.message,
            "user_id": self.recipient_id,
            "type": self.type.value,
            "related_id": self.related_id,
            "related_table": self.related_table,
        }


class Notification(BaseModel):
    """永続化済みの通知レコード。"""

    id: str = Field(..., description="ストア側で採番された通知 ID")
    title: str
    message: str
    recipient_id: str = Field(..., description="宛先の管理者プロフィール ID")
    type: NotificationType
    related_id: Optional[str] = Field(None, description="送信元エンティティの ID")
    related_table: Optional[str] = Field(None, description="送信元エンティティのテーブル名")
    created_at: datetime = Field(..., description="永続化時刻")

    @classmethod
    def from_row(cls, row: dict, draft: NotificationDraft) -> "Notification":
        """
        insert 後に返された行から Notification を組み立てる。

        行は既にコミット済みなので、null 許容の列（user_id / type / created_at など）が
        欠けていても失敗させず、draft の値や現在時刻で補う。
        """
        return cls(
            id=str(row["id"]),
            title=row.get("title") or draft.title,
            message=row.get("message") or draft.message,
            recipient_id=str(row.get("user_id") or draft.recipient_id),
            type=row.get("type") or draft.type,
            related_id=row.get("related_id", draft.related_id),
            related_table=row.get("related_table", draft.related_table),
            created_at=row.get("created_at") or datetime.now(timezone.utc),
        )


class ContactAdminInput(BaseModel):
    """フォームから受け取る件名と本文。"""

    subject: str = Field("", description="件名")
    body: str = Field("", description="本文")


class SubmissionResult(BaseModel):
    """
    送信成功時の結果。

    clear_input は呼び出し側へ入力欄のクリアを指示するフラグ。
    """

    notification: Notification
    clear_input: bool = True
    message: str = "Message sent to admin!"


class ContactAdminRequest(ContactAdminInput):
    """/contact/admin のリクエストボディ。"""

    sender_id: str = Field(..., description="送信者（ログイン中ユーザー）のプロフィール ID")


class ContactAdminResponse(BaseModel):
    """/contact/admin のレスポンスボディ。"""

    notification_id: str
    recipient_id: str
    created_at: datetime
    clear_input: bool
    message: str


class ContactAdminErrorDetail(BaseModel):
    """エラー時の detail。"""

    kind: ErrorKind
    message: str
