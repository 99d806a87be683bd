from fastapi.testclient import TestClient

from admin_contact.contact.repository import InMemoryContactStore
from admin_contact.contact.router import get_submission_controller
from admin_contact.contact.schemas import Profile, UserRole
from admin_contact.contact.service import SubmissionController
from admin_contact.main import create_app


def create_test_client(store: InMemoryContactStore) -> TestClient:
    """
    SubmissionController をインメモリストア版に差し替えた TestClient を作る。
    """
    app = create_app()
    app.dependency_overrides[get_submission_controller] = lambda: SubmissionController(
        store, store
    )
    return TestClient(app)


def _body(subject: str = "Bug report", body: str = "Login is broken") -> dict:
    return {"subject": subject, "body": body, "sender_id": "N1"}


def test_contact_admin_success():
    store = InMemoryContactStore([Profile(id="A1", role=UserRole.ADMIN)])
    client = create_test_client(store)

    resp = client.post("/contact/admin", json=_body())

    assert resp.status_code == 201
    data = resp.json()
    assert data["recipient_id"] == "A1"
    assert data["clear_input"] is True
    assert data["message"] == "Message sent to admin!"
    assert data["notification_id"] == store.notifications[0].id


def test_contact_admin_blank_subject_is_400():
    store = InMemoryContactStore([Profile(id="A1", role=UserRole.ADMIN)])
    client = create_test_client(store)

    resp = client.post("/contact/admin", json=_body(subject=""))

    assert resp.status_code == 400
    assert resp.json()["detail"]["kind"] == "validation_failure"
    assert store.lookup_calls == 0


def test_contact_admin_without_admin_is_404():
    client = create_test_client(InMemoryContactStore([]))

    resp = client.post("/contact/admin", json=_body())

    assert resp.status_code == 404
    assert resp.json()["detail"] == {
        "kind": "no_admin_available",
        "message": "No admin found.",
    }


def test_contact_admin_store_failures_are_502():
    admins = [Profile(id="A1", role=UserRole.ADMIN)]

    lookup_resp = create_test_client(
        InMemoryContactStore(admins, fail_lookup=True)
    ).post("/contact/admin", json=_body())
    write_resp = create_test_client(
        InMemoryContactStore(admins, fail_write=True)
    ).post("/contact/admin", json=_body())

    assert lookup_resp.status_code == 502
    assert lookup_resp.json()["detail"]["kind"] == "lookup_failure"
    assert write_resp.status_code == 502
    assert write_resp.json()["detail"]["message"] == "Failed to send message."


def test_get_submission_controller_builds_from_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "http://supabase.test")
    monkeypatch.setenv("SUPABASE_KEY", "dummy-key")
    get_submission_controller.cache_clear()

    try:
        controller = get_submission_controller()
        assert isinstance(controller, SubmissionController)
        assert get_submission_controller() is controller
    finally:
        get_submission_controller.cache_clear()


def test_health_check():
    client = TestClient(create_app())

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
