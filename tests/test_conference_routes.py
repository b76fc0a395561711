"""Conference REST endpoint tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from conferences.app import create_app
from conferences.config import Settings
from conferences.services import ConferenceSyncService

API = "/api/v1/conferences"
SEARCH_API = "/api/v1/_search/conferences"

DEFAULT_NAME = "AAAAAAAAAA"
UPDATED_NAME = "BBBBBBBBBB"
UPDATED_DATE = "2024-05-17T09:30:12Z"


def _create(client: TestClient, **body) -> dict:
    payload = {"name": DEFAULT_NAME, "date": 0, **body}
    response = client.post(API, json=payload)
    assert response.status_code == 201
    return response.json()


def test_create_conference(client: TestClient) -> None:
    response = client.post(API, json={"name": DEFAULT_NAME, "date": 0})

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body["id"], int)
    assert body["name"] == DEFAULT_NAME
    assert body["date"].startswith("1970-01-01T00:00:00")
    assert response.headers["location"] == f"{API}/{body['id']}"
    assert response.headers["x-testApp-alert"] == "testApp.conference.created"
    assert response.headers["x-testApp-params"] == str(body["id"])


def test_created_conference_is_readable_and_searchable(client: TestClient) -> None:
    created = _create(client)

    fetched = client.get(f"{API}/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created

    hits = client.get(SEARCH_API, params={"query": f"id:{created['id']}"})
    assert hits.status_code == 200
    assert hits.json() == [created]


def test_create_with_existing_id_is_bad_request(client: TestClient) -> None:
    response = client.post(API, json={"id": 1, "name": DEFAULT_NAME, "date": 0})

    assert response.status_code == 400
    assert response.json() == {
        "title": "A new conference cannot already have an ID",
        "entity_name": "conference",
        "error_key": "idexists",
        "message": "error.idexists",
    }
    assert response.headers["x-testApp-error"] == "error.idexists"
    assert response.headers["x-testApp-params"] == "conference"
    assert client.get(API).json() == []


def test_list_conferences(client: TestClient) -> None:
    first = _create(client)
    second = _create(client, name="Other")

    response = client.get(API)
    assert response.status_code == 200
    assert sorted(c["id"] for c in response.json()) == sorted([first["id"], second["id"]])


def test_get_missing_conference_is_not_found(client: TestClient) -> None:
    response = client.get(f"{API}/{2**63 - 1}")
    assert response.status_code == 404
    assert response.json()["error_key"] == "idnotfound"


@pytest.mark.parametrize("method", ["get", "delete"])
def test_id_beyond_64_bits_is_rejected(client: TestClient, method: str) -> None:
    response = client.request(method.upper(), f"{API}/{2**63}")
    assert response.status_code == 422


def test_put_and_patch_with_id_beyond_64_bits_are_rejected(client: TestClient) -> None:
    too_big = 2**63
    put = client.put(f"{API}/{too_big}", json={"id": too_big, "name": UPDATED_NAME})
    patch = client.patch(f"{API}/{too_big}", json={"id": too_big})
    below = client.get(f"{API}/{-(2**63) - 1}")

    assert put.status_code == 422
    assert patch.status_code == 422
    assert below.status_code == 422
    assert client.get(API).json() == []


def test_body_id_beyond_64_bits_is_rejected(client: TestClient) -> None:
    created = _create(client)

    response = client.put(
        f"{API}/{created['id']}", json={"id": 2**63, "name": UPDATED_NAME}
    )
    assert response.status_code == 422
    assert client.post(API, json={"id": 2**64, "name": DEFAULT_NAME}).status_code == 422
    assert client.get(f"{API}/{created['id']}").json() == created


def test_put_conference(client: TestClient) -> None:
    created = _create(client)
    body = {"id": created["id"], "name": UPDATED_NAME, "date": UPDATED_DATE}

    response = client.put(f"{API}/{created['id']}", json=body)

    assert response.status_code == 200
    assert response.json()["name"] == UPDATED_NAME
    assert response.headers["x-testApp-alert"] == "testApp.conference.updated"
    assert client.get(f"{API}/{created['id']}").json()["name"] == UPDATED_NAME

    hits = client.get(SEARCH_API, params={"query": f"name:{UPDATED_NAME}"}).json()
    assert [h["id"] for h in hits] == [created["id"]]


def test_put_without_body_id_is_bad_request(client: TestClient) -> None:
    created = _create(client)

    response = client.put(f"{API}/{created['id']}", json={"name": UPDATED_NAME})
    assert response.status_code == 400
    assert response.json()["error_key"] == "idnull"


def test_put_with_id_mismatch_is_bad_request(client: TestClient) -> None:
    created = _create(client)

    response = client.put(
        f"{API}/{created['id']}",
        json={"id": created["id"] + 1, "name": UPDATED_NAME},
    )
    assert response.status_code == 400
    assert response.json()["error_key"] == "idinvalid"
    assert client.get(f"{API}/{created['id']}").json()["name"] == DEFAULT_NAME


def test_put_unknown_id_is_bad_request_by_default(client: TestClient) -> None:
    response = client.put(f"{API}/77", json={"id": 77, "name": UPDATED_NAME})

    assert response.status_code == 400
    assert response.json()["error_key"] == "idnotfound"
    assert client.get(API).json() == []


def test_put_on_collection_is_not_allowed(client: TestClient) -> None:
    response = client.put(API, json={"id": 1, "name": UPDATED_NAME})
    assert response.status_code == 405


def test_patch_with_only_id_keeps_fields(client: TestClient) -> None:
    created = _create(client)

    response = client.patch(
        f"{API}/{created['id']}",
        content=f'{{"id": {created["id"]}}}',
        headers={"Content-Type": "application/merge-patch+json"},
    )

    assert response.status_code == 200
    assert response.json() == created


def test_patch_updates_given_fields(client: TestClient) -> None:
    created = _create(client)

    response = client.patch(
        f"{API}/{created['id']}",
        json={"id": created["id"], "name": UPDATED_NAME, "date": None},
    )

    assert response.status_code == 200
    assert response.json() == {**created, "name": UPDATED_NAME}
    assert response.headers["x-testApp-alert"] == "testApp.conference.updated"


def test_patch_unknown_id_is_bad_request_by_default(client: TestClient) -> None:
    response = client.patch(f"{API}/88", json={"id": 88})
    assert response.status_code == 400
    assert response.json()["error_key"] == "idnotfound"


def test_delete_conference(client: TestClient) -> None:
    created = _create(client)

    response = client.delete(f"{API}/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["x-testApp-alert"] == "testApp.conference.deleted"

    assert client.get(f"{API}/{created['id']}").status_code == 404
    assert client.get(SEARCH_API, params={"query": f"id:{created['id']}"}).json() == []


def test_delete_unknown_id_is_no_content(client: TestClient) -> None:
    assert client.delete(f"{API}/12345").status_code == 204
    assert client.delete(f"{API}/12345").status_code == 204


def test_index_failure_does_not_change_status(client: TestClient, failing_index) -> None:
    state = client.app.state
    state.conference_service = ConferenceSyncService(state.conference_store, failing_index)

    created = client.post(API, json={"name": DEFAULT_NAME})
    assert created.status_code == 201
    conference_id = created.json()["id"]

    updated = client.put(
        f"{API}/{conference_id}", json={"id": conference_id, "name": UPDATED_NAME}
    )
    assert updated.status_code == 200
    assert client.delete(f"{API}/{conference_id}").status_code == 204


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get(API, headers={"X-Request-ID": "abc123"})
    assert response.headers["x-request-id"] == "abc123"


def test_reindex_endpoint(client: TestClient) -> None:
    created = _create(client)
    client.app.state.search_index.clear()
    assert client.get(SEARCH_API, params={"query": DEFAULT_NAME}).json() == []

    response = client.post("/api/v1/admin/reindex")
    assert response.status_code == 200
    assert response.json() == {"success": True, "document_count": 1}
    assert client.get(SEARCH_API, params={"query": DEFAULT_NAME}).json() == [created]


def test_invalid_search_query_returns_empty_list(client: TestClient) -> None:
    _create(client)
    response = client.get(SEARCH_API, params={"query": 'name:"unbalanced'})
    assert response.status_code == 200
    assert response.json() == []


@pytest.fixture
def not_found_client(settings: Settings) -> Iterator[TestClient]:
    strict = settings.model_copy(update={"unknown_id_status": "not_found"})
    with TestClient(create_app(strict)) as test_client:
        yield test_client


def test_unknown_id_status_is_configurable(not_found_client: TestClient) -> None:
    put = not_found_client.put(f"{API}/77", json={"id": 77, "name": UPDATED_NAME})
    patch = not_found_client.patch(f"{API}/77", json={"id": 77})

    assert put.status_code == 404
    assert patch.status_code == 404
    assert put.json()["error_key"] == "idnotfound"
