"""
HTTP surface: form authoring, form detail and submission status mapping.
"""

import pytest
from fastapi.testclient import TestClient

from formquota.config.settings import Settings
from formquota.main import create_app
from formquota.models.domain.admission import AdmissionOutcome
from formquota.repositories.store import Store
from formquota.services.errors import ResourceUnavailable


@pytest.fixture
def memory_settings():
    return Settings(store_backend="memory", lock_timeout_seconds=1.0)


@pytest.fixture
def client(memory_settings):
    app = create_app(memory_settings)
    with TestClient(app) as client:
        yield client


def create(client, limits=(2, None)):
    response = client.post("/api/forms", json={
        "title": "Campus tour",
        "description": "Choose a time",
        "questions": [
            {
                "text": "Which tour?",
                "type": "single_choice",
                "order": 1,
                "options": [{"text": f"Tour {i}", "limit": limit} for i, limit in enumerate(limits)],
            }
        ],
    })
    assert response.status_code == 201
    form_id = response.json()["form_id"]
    detail = client.get(f"/api/forms/{form_id}").json()
    return detail


def submit(client, detail, option_index=0):
    question = detail["questions"][0]
    return client.post(f"/api/forms/{detail['form_id']}/submissions", json={
        "question_id": question["question_id"],
        "option_id": question["options"][option_index]["option_id"],
    })


class TestForms:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/api/health").json()["backend"] == "memory"

    def test_create_and_read_form(self, client):
        detail = create(client)

        assert detail["title"] == "Campus tour"
        assert detail["form_id"].startswith("fm_")
        options = detail["questions"][0]["options"]
        assert [o["limit"] for o in options] == [2, None]
        assert [o["consumed_count"] for o in options] == [0, 0]
        assert [o["exhausted"] for o in options] == [False, False]

    def test_missing_form_is_404(self, client):
        assert client.get("/api/forms/fm_zzzzzzzz").status_code == 404

    @pytest.mark.parametrize("payload", [
        {"title": "No questions", "questions": []},
        {"title": "", "questions": [{"text": "Q", "options": []}]},
        {"title": "Bad limit", "questions": [{"text": "Q", "options": [{"text": "A", "limit": -1}]}]},
        {"title": "Blank option", "questions": [{"text": "Q", "options": [{"text": ""}]}]},
    ])
    def test_invalid_payload_is_422(self, client, payload):
        assert client.post("/api/forms", json=payload).status_code == 422


class TestSubmissions:

    def test_admitted_then_exhausted(self, client):
        detail = create(client, limits=(2,))

        first = submit(client, detail)
        second = submit(client, detail)
        third = submit(client, detail)

        assert first.status_code == 201
        assert first.json()["status"] == "admitted"
        assert first.json()["submission_id"].startswith("sb_")
        assert second.status_code == 201
        assert third.status_code == 409
        assert third.json()["status"] == "rejected"
        assert third.json()["reason"] == "exhausted"

        option = client.get(f"/api/forms/{detail['form_id']}").json()["questions"][0]["options"][0]
        assert option["consumed_count"] == 2
        assert option["exhausted"] is True

    def test_unknown_option_is_404(self, client):
        detail = create(client)
        response = client.post(f"/api/forms/{detail['form_id']}/submissions", json={
            "question_id": detail["questions"][0]["question_id"],
            "option_id": "op_zzzzzzzz",
        })

        assert response.status_code == 404
        assert response.json()["status"] == "rejected"
        assert response.json()["reason"] == "invalid"

    def test_wrong_form_is_404(self, client):
        detail = create(client)
        detail = dict(detail, form_id="fm_zzzzzzzz")

        assert submit(client, detail).status_code == 404

    def test_missing_fields_are_422(self, client):
        detail = create(client)
        response = client.post(f"/api/forms/{detail['form_id']}/submissions", json={})
        assert response.status_code == 422


class FailingAllocator:
    async def submit(self, form_id, question_id, option_id):
        return AdmissionOutcome.unavailable("Timed out waiting for option")


class FailingForms:
    async def create_full_form(self, form):
        raise ResourceUnavailable("connection refused")

    async def get_by_id(self, form_id):
        raise ResourceUnavailable("connection refused")


class TestFaults:

    def test_unavailable_submission_is_500(self, memory_settings):
        app = create_app(memory_settings)
        with TestClient(app) as client:
            app.state.allocator = FailingAllocator()
            response = client.post("/api/forms/fm_00000000/submissions", json={
                "question_id": "qs_00000000",
                "option_id": "op_00000000",
            })

        assert response.status_code == 500
        assert response.json() == {"status": "error"}

    def test_storage_failure_on_forms_is_500(self, memory_settings):
        store = Store(forms=FailingForms(), submissions=None, backend="memory")
        app = create_app(memory_settings, store=store)
        with TestClient(app) as client:
            created = client.post("/api/forms", json={
                "title": "T", "questions": [{"text": "Q", "options": [{"text": "A"}]}],
            })
            read = client.get("/api/forms/fm_00000000")

        assert created.status_code == 500
        assert read.status_code == 500
