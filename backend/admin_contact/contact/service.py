# backend/admin_contact/contact/service.py

"""
管理者への問い合わせ送信ワークフローのサービス層。

責務:
- 件名・本文の空チェック（I/O の前に行う）
- AdminResolver で宛先候補を取得し、選択ポリシーで 1 人を選ぶ
- NotificationDraft を組み立てて NotificationWriter に渡す
- 失敗はすべて種別付きの例外としてそのまま呼び出し元へ返す（再試行しない）
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import (
    ContactAdminError,
    InvalidTransitionError,
    LookupFailure,
    NoAdminAvailable,
    ValidationFailure,
    WriteFailure,
)
from .repository import AdminResolver, NotificationWriter
from .schemas import (
    PROFILES_TABLE,
    ContactAdminInput,
    ErrorKind,
    Notification,
    NotificationDraft,
    NotificationType,
    SubmissionResult,
    SubmissionState,
)
from .selection import RecipientSelector, select_first

logger = logging.getLogger(__name__)

_TERMINAL_STATES = (SubmissionState.SUCCEEDED, SubmissionState.FAILED)
_IN_FLIGHT_STATES = (SubmissionState.RESOLVING_RECIPIENT, SubmissionState.WRITING)


class Submission:
    """
    1 回分の送信処理。

    Idle → Validating → ResolvingRecipient → Writing → Succeeded | Failed
    終端状態からの遷移は許さない。再送信は新しいインスタンスで行う。
    """

    def __init__(self, payload: ContactAdminInput, sender_id: Optional[str]) -> None:
        self.payload = payload
        self.sender_id = sender_id
        self.state = SubmissionState.IDLE
        self.notification: Optional[Notification] = None
        self.error: Optional[ContactAdminError] = None

    @property
    def in_flight(self) -> bool:
        return self.state in _IN_FLIGHT_STATES

    @property
    def is_terminal(self) -> bool:
        return self.state in _TERMINAL_STATES

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def _transition(self, expected: SubmissionState, target: SubmissionState) -> None:
        if self.state != expected:
            raise InvalidTransitionError(
                f"Cannot move submission from {self.state.value} to {target.value}"
            )
        self.state = target

    def start(self) -> None:
        self._transition(SubmissionState.IDLE, SubmissionState.VALIDATING)

    def resolving(self) -> None:
        self._transition(SubmissionState.VALIDATING, SubmissionState.RESOLVING_RECIPIENT)

    def writing(self) -> None:
        self._transition(SubmissionState.RESOLVING_RECIPIENT, SubmissionState.WRITING)

    def succeed(self, notification: Notification) -> None:
        self._transition(SubmissionState.WRITING, SubmissionState.SUCCEEDED)
        self.notification = notification

    def fail(self, error: ContactAdminError) -> None:
        if self.state == SubmissionState.IDLE or self.is_terminal:
            raise InvalidTransitionError(
                f"Cannot fail submission in state {self.state.value}"
            )
        self.state = SubmissionState.FAILED
        self.error = error


class SubmissionController:
    """
    AdminResolver と NotificationWriter を組み合わせて送信処理を行う。

    - ストアはコンストラクタで注入する（テストでは InMemoryContactStore を渡す）
    - 宛先選択は selector に委譲する（デフォルトは先頭の管理者）
    - 送信間で共有する状態は持たない（round_robin の selector を除く）
    """

    def __init__(
        self,
        resolver: AdminResolver,
        writer: NotificationWriter,
        *,
        selector: Optional[RecipientSelector] = None,
    ) -> None:
        self._resolver = resolver
        self._writer = writer
        self._selector: RecipientSelector = selector or select_first

    def start(self, payload: ContactAdminInput, sender_id: Optional[str]) -> Submission:
        """Idle 状態の Submission を作る。"""
        return Submission(payload, sender_id)

    async def run(self, submission: Submission) -> SubmissionResult:
        """
        Submission を終端状態まで進める。

        :raises ValidationFailure: 件名・本文が空（ストアには触れない）
        :raises LookupFailure: 管理者検索の失敗
        :raises NoAdminAvailable: 管理者が 0 件
        :raises WriteFailure: 通知の insert 失敗
        """
        submission.start()

        subject = submission.payload.subject.strip()
        body = submission.payload.body.strip()
        if not subject or not body:
            error = ValidationFailure()
            submission.fail(error)
            logger.warning("Contact submission rejected: empty subject or message.")
            raise error

        submission.resolving()
        try:
            admins = await self._resolver.find_admins()
        except LookupFailure as exc:
            submission.fail(exc)
            raise

        if not admins:
            error = NoAdminAvailable()
            submission.fail(error)
            logger.warning("Contact submission failed: no admin profile found.")
            raise error

        recipient = self._selector(admins)
        draft = NotificationDraft(
            title=subject,
            message=body,
            recipient_id=recipient.id,
            type=NotificationType.ADMIN_CONTACT,
            related_id=submission.sender_id,
            related_table=PROFILES_TABLE,
        )

        submission.writing()
        try:
            notification = await self._writer.create(draft)
        except WriteFailure as exc:
            submission.fail(exc)
            raise

        submission.succeed(notification)
        logger.info(
            "Contact message %s sent to admin %s (sender=%s).",
            notification.id,
            recipient.id,
            submission.sender_id,
        )
        return SubmissionResult(notification=notification)

    async def submit(
        self,
        payload: ContactAdminInput,
        sender_id: Optional[str],
    ) -> SubmissionResult:
        """start() と run() をまとめて行う。"""
        return await self.run(self.start(payload, sender_id))
