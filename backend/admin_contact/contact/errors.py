# backend/admin_contact/contact/errors.py

"""
問い合わせ送信ワークフローの例外。

いずれも送信処理にとって終端であり、コア側では再試行しない。
"""

from .schemas import ErrorKind


class ContactAdminError(Exception):
    """送信ワークフローの基底例外。kind と利用者向けメッセージを持つ。"""

    kind: ErrorKind
    default_message = "Failed to send message."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationFailure(ContactAdminError):
    """件名または本文が空。I/O は一切行っていない。"""

    kind = ErrorKind.VALIDATION_FAILURE
    default_message = "Subject and message are required."


class LookupFailure(ContactAdminError):
    """管理者の検索に失敗した（ストア停止・クエリ異常を区別しない）。"""

    kind = ErrorKind.LOOKUP_FAILURE
    default_message = "Failed to look up administrators."


class NoAdminAvailable(ContactAdminError):
    """検索は成功したが管理者が 0 件だった。"""

    kind = ErrorKind.NO_ADMIN_AVAILABLE
    default_message = "No admin found."


class WriteFailure(ContactAdminError):
    """通知レコードの insert に失敗した。部分的なレコードは残らない。"""

    kind = ErrorKind.WRITE_FAILURE
    default_message = "Failed to send message."


class InvalidTransitionError(RuntimeError):
    """Submission の状態遷移として許されない呼び出し。"""
