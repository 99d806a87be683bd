# backend/admin_contact/contact/router.py
from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from admin_contact.store.client import SupabaseClient

from .errors import ContactAdminError
from .repository import SupabaseAdminResolver, SupabaseNotificationWriter
from .schemas import (
    ContactAdminErrorDetail,
    ContactAdminRequest,
    ContactAdminResponse,
    ErrorKind,
)
from .selection import get_recipient_selector
from .service import SubmissionController

router = APIRouter(prefix="/contact", tags=["contact"])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_ADMIN_AVAILABLE: status.HTTP_404_NOT_FOUND,
    ErrorKind.LOOKUP_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.WRITE_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


@lru_cache()
def get_submission_controller() -> SubmissionController:
    """
    SubmissionController のシングルトンインスタンスを取得する。

    NOTE:
      - テストでは app.dependency_overrides でインメモリ版に差し替える前提。
      - 本番では SUPABASE_URL / SUPABASE_KEY が設定されている前提。
    """
    client = SupabaseClient()
    return SubmissionController(
        SupabaseAdminResolver(client),
        SupabaseNotificationWriter(client),
        selector=get_recipient_selector(),
    )


@router.post(
    "/admin",
    response_model=ContactAdminResponse,
    status_code=status.HTTP_201_CREATED,
    summary="システム管理者へメッセージを送信",
)
async def post_contact_admin(
    body: ContactAdminRequest,
    controller: SubmissionController = Depends(get_submission_controller),
) -> ContactAdminResponse:
    """
    件名と本文を受け取り、管理者宛ての通知レコードを 1 件作成するエンドポイント。

    - 件名・本文が空 → 400
    - 管理者が見つからない → 404
    - ストアの検索・書き込み失敗 → 502
    """
    try:
        result = await controller.submit(body, body.sender_id)
    except ContactAdminError as exc:
        raise HTTPException(
            status_code=_STATUS_BY_KIND[exc.kind],
            detail=ContactAdminErrorDetail(kind=exc.kind, message=exc.message).model_dump(mode="json"),
        ) from exc

    notification = result.notification
    return ContactAdminResponse(
        notification_id=notification.id,
        recipient_id=notification.recipient_id,
        created_at=notification.created_at,
        clear_input=result.clear_input,
        message=result.message,
    )
