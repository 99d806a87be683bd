import pytest

from admin_contact.contact.schemas import Profile, UserRole
from admin_contact.contact.selection import (
    RoundRobinSelector,
    build_selector,
    get_recipient_selector,
    select_first,
)

ADMINS = [
    Profile(id="A1", role=UserRole.ADMIN),
    Profile(id="A2", role=UserRole.ADMIN),
    Profile(id="A3", role=UserRole.ADMIN),
]


def test_select_first_returns_head_of_sequence():
    assert select_first(ADMINS).id == "A1"


def test_round_robin_wraps_around():
    selector = RoundRobinSelector()

    picked = [selector(ADMINS).id for _ in range(4)]

    assert picked == ["A1", "A2", "A3", "A1"]


def test_round_robin_handles_shrinking_pool():
    selector = RoundRobinSelector()
    selector(ADMINS)
    selector(ADMINS)

    assert selector(ADMINS[:1]).id == "A1"


def test_build_selector_rejects_unknown_policy():
    with pytest.raises(RuntimeError):
        build_selector("least_loaded")


def test_get_recipient_selector_defaults_to_first(monkeypatch):
    monkeypatch.delenv("CONTACT_RECIPIENT_POLICY", raising=False)

    assert get_recipient_selector() is select_first


def test_get_recipient_selector_reads_env(monkeypatch):
    monkeypatch.setenv("CONTACT_RECIPIENT_POLICY", "round_robin")

    assert isinstance(get_recipient_selector(), RoundRobinSelector)
