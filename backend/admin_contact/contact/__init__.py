"""
管理者への問い合わせ送信モジュール。

- schemas: Profile / Notification / 入出力の Pydantic モデル
- errors: 失敗種別ごとの例外
- repository: AdminResolver / NotificationWriter とその実装
- selection: 宛先管理者の選択ポリシー
- service: 送信ワークフロー本体（SubmissionController）
- router: /contact/admin エンドポイント
"""

from .errors import (  # noqa: F401
    ContactAdminError,
    LookupFailure,
    NoAdminAvailable,
    ValidationFailure,
    WriteFailure,
)
from .repository import AdminResolver, InMemoryContactStore, NotificationWriter  # noqa: F401
from .service import Submission, SubmissionController  # noqa: F401
