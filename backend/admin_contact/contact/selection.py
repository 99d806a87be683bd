# backend/admin_contact/contact/selection.py

"""
宛先管理者の選択ポリシー。

- first: AdminResolver が返した先頭を選ぶ（デフォルト）
- round_robin: 同じコントローラが処理する送信ごとに順番に回す

どちらも空でないリストを前提とする（空の判定はコントローラ側）。
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence

from admin_contact.utils.config import get_env

from .schemas import Profile

RecipientSelector = Callable[[Sequence[Profile]], Profile]


class RecipientPolicy(str, Enum):
    """CONTACT_RECIPIENT_POLICY に指定できる選択ポリシー。"""

    FIRST = "first"
    ROUND_ROBIN = "round_robin"


def select_first(admins: Sequence[Profile]) -> Profile:
    """AdminResolver が返した順序の先頭を選ぶ。"""
    return admins[0]


class RoundRobinSelector:
    """
    呼び出しごとに次の管理者を選ぶ。

    返される順序が毎回同じであれば均等に分散する。順序が変わる場合は近似。
    """

    def __init__(self) -> None:
        self._cursor = 0

    def __call__(self, admins: Sequence[Profile]) -> Profile:
        admin = admins[self._cursor % len(admins)]
        self._cursor += 1
        return admin


def build_selector(policy: RecipientPolicy | str) -> RecipientSelector:
    try:
        policy = RecipientPolicy(policy)
    except ValueError as exc:
        raise RuntimeError(f"Unknown recipient policy: {policy!r}") from exc

    if policy == RecipientPolicy.ROUND_ROBIN:
        return RoundRobinSelector()
    return select_first


def get_recipient_selector() -> RecipientSelector:
    """
    CONTACT_RECIPIENT_POLICY（任意, デフォルト first）から選択ポリシーを構築する。
    """
    policy = get_env(
        "CONTACT_RECIPIENT_POLICY",
        default=RecipientPolicy.FIRST.value,
        required=False,
    )
    return build_selector(policy)
