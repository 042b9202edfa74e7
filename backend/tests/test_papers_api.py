import pytest

from paper_tracker import create_app
from paper_tracker.config import TestConfig
from paper_tracker.errors import NotificationDeliveryError

SLOTS = [{"slotNumber": f"S{i}", "email": "", "isFilled": False} for i in range(1, 6)]


def _create(client, paper_id="P1", slots=SLOTS, **extra):
    body = {"paperId": paper_id, "title": "T", "domain": "AI", **extra}
    if slots is not None:
        body["slots"] = slots
    resp = client.post("/api/papers/", json=body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def _fill_all(client, paper_uuid):
    for i in range(1, 6):
        resp = client.put(
            f"/api/papers/{paper_uuid}/fill-slot",
            json={"slotNumber": f"S{i}", "email": f"r{i}@example.org"},
        )
        assert resp.status_code == 200


def test_create_returns_wire_representation(client) -> None:
    paper = _create(client)
    assert set(paper) == {"id", "paperId", "title", "domain", "status", "slots"}
    assert paper["paperId"] == "P1"
    assert paper["status"] == "pending"
    assert paper["slots"][0] == {"slotNumber": "S1", "email": "", "isFilled": False}


def test_create_without_slots_defaults_to_empty(client) -> None:
    paper = _create(client, slots=None)
    assert paper["slots"] == []


def test_create_ignores_client_status(client) -> None:
    paper = _create(client, status="published")
    assert paper["status"] == "pending"


@pytest.mark.parametrize("body", [{"title": "T"}, {"paperId": "P1"}, {"paperId": "", "title": "T"}])
def test_create_missing_required_fields(client, body) -> None:
    resp = client.post("/api/papers/", json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_create_duplicate_paper_id(client) -> None:
    _create(client)
    resp = client.post("/api/papers/", json={"paperId": "P1", "title": "Again"})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "duplicate_key"


def test_create_rejects_malformed_json(client) -> None:
    resp = client.post("/api/papers/", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_list_and_filled_slots(client) -> None:
    full = _create(client, "P-full")
    _create(client, "P-partial")
    _create(client, "P-empty", slots=[])
    _fill_all(client, full["id"])

    listed = client.get("/api/papers/").get_json()["data"]
    assert {p["paperId"] for p in listed} == {"P-full", "P-partial", "P-empty"}

    filled = client.get("/api/papers/filled-slots").get_json()["data"]
    assert [p["paperId"] for p in filled] == ["P-full"]


def test_get_paper_and_not_found(client) -> None:
    paper = _create(client)
    assert client.get(f"/api/papers/{paper['id']}").get_json()["data"] == paper
    resp = client.get("/api/papers/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "not_found", "message": "Paper not found"}


def test_fill_slot_updates_and_appends(client) -> None:
    paper = _create(client)
    resp = client.put(f"/api/papers/{paper['id']}/fill-slot", json={"slotNumber": "S2", "email": "a@example.org"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert len(data["slots"]) == 5
    assert data["slots"][1] == {"slotNumber": "S2", "email": "a@example.org", "isFilled": True}

    resp = client.put(f"/api/papers/{paper['id']}/fill-slot", json={"slotNumber": "S7", "email": "b@example.org"})
    assert len(resp.get_json()["data"]["slots"]) == 6


def test_fill_slot_requires_email(client) -> None:
    paper = _create(client)
    resp = client.put(f"/api/papers/{paper['id']}/fill-slot", json={"slotNumber": "S1", "email": ""})
    assert resp.status_code == 400


def test_fill_slot_unknown_paper(client) -> None:
    resp = client.put("/api/papers/nope/fill-slot", json={"slotNumber": "S1", "email": "a@example.org"})
    assert resp.status_code == 404


def test_update_stage_sends_notifications(app, client) -> None:
    paper = _create(client)
    _fill_all(client, paper["id"])

    resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "submit"})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["message"] == "Paper status updated to submit and notifications sent"
    assert data["paper"]["status"] == "submit"
    assert data["statusPersisted"] is True
    assert data["notification"] == "sent"

    sent = app.extensions["notifier"].sent
    assert len(sent) == 1
    assert sent[0].recipients == [f"r{i}@example.org" for i in range(1, 6)]
    assert sent[0].subject == "Paper Submitted for Review"


def test_update_stage_without_slots(client) -> None:
    paper = _create(client, slots=[])
    resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "submit"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["message"] == "Paper status updated to submit, but no users to notify"
    assert data["notification"] == "skipped"


def test_update_stage_incomplete_slots(app, client) -> None:
    paper = _create(client)
    client.put(f"/api/papers/{paper['id']}/fill-slot", json={"slotNumber": "S1", "email": "a@example.org"})

    resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "submit"})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["error"] == "slots_incomplete"
    assert body["openSlots"] == ["S2", "S3", "S4", "S5"]
    assert client.get(f"/api/papers/{paper['id']}").get_json()["data"]["status"] == "pending"
    assert len(app.extensions["notifier"].sent) == 0


@pytest.mark.parametrize(
    "body",
    [{"stage": "pending"}, {"stage": "archived"}, {}, {"stage": 5}, {"stage": None}, {"stage": ["submit"]}],
)
def test_update_stage_invalid(client, body) -> None:
    paper = _create(client)
    resp = client.put(f"/api/papers/{paper['id']}/update-stage", json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_stage"


def test_update_stage_unknown_paper(client) -> None:
    resp = client.put("/api/papers/nope/update-stage", json={"stage": "submit"})
    assert resp.status_code == 404


def test_update_stage_delivery_failure_reports_persisted_paper(app, client) -> None:
    class Refusing:
        def send(self, recipients, subject, html):
            raise NotificationDeliveryError("relay down")

    paper = _create(client)
    _fill_all(client, paper["id"])
    app.extensions["notifier"] = Refusing()

    resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "reviewing"})

    assert resp.status_code == 502
    body = resp.get_json()
    assert body["error"] == "notification_delivery_failed"
    assert body["statusPersisted"] is True
    assert body["paper"]["status"] == "reviewing"
    assert client.get(f"/api/papers/{paper['id']}").get_json()["data"]["status"] == "reviewing"


def test_strict_sequence_flag() -> None:
    app = create_app(TestConfig(STRICT_STAGE_SEQUENCE=True))
    with app.app_context():
        client = app.test_client()
        paper = _create(client, slots=[])
        resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "accepted"})
        assert resp.status_code == 400
        assert resp.get_json()["expected"] == "submit"
        resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "submit"})
        assert resp.status_code == 200


def test_console_notifier_history_is_bounded() -> None:
    app = create_app(TestConfig(MAIL_RECORD_HISTORY=3))
    with app.app_context():
        client = app.test_client()
        paper = _create(client)
        _fill_all(client, paper["id"])
        for _ in range(10):
            resp = client.put(f"/api/papers/{paper['id']}/update-stage", json={"stage": "reviewing"})
            assert resp.status_code == 200
        assert len(app.extensions["notifier"].sent) == 3
