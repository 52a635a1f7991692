"""Document store client tests against a mocked HTTP transport."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest
from simple_record_forms.configuration import StoreSettings
from simple_record_forms.list_engine import ListScreen
from simple_record_forms.notifications import Notifier
from simple_record_forms.remote_store import (
    BackendError,
    DocumentStoreClient,
    ListQuery,
    NotFoundError,
    StoreError,
    TransportError,
    ValidationError,
)
from simple_record_forms.schema_management import DEFAULT_SCHEMA

_SETTINGS = StoreSettings(
    endpoint="https://store.example.com/v1/",
    project_id="proj-1",
    database_id="db-1",
    collection_id="events",
)
_DOCUMENTS_URL = "https://store.example.com/v1/databases/db-1/collections/events/documents"


def _document(record_id: str, **fields: object) -> dict[str, object]:
    return {
        "$id": record_id,
        "$collectionId": "events",
        "$databaseId": "db-1",
        "$createdAt": "2024-05-01T10:00:00.000+00:00",
        "$updatedAt": "2024-05-02T10:00:00.000+00:00",
        "$permissions": [],
        **fields,
    }


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    settings: StoreSettings = _SETTINGS,
) -> DocumentStoreClient:
    transport = httpx.MockTransport(handler)
    return DocumentStoreClient(settings, http_client=httpx.AsyncClient(transport=transport))


def test_list_orders_newest_first_and_strips_system_attributes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "total": 2,
                "documents": [
                    _document("b", EventName="Later", host="Kim"),
                    _document("a", EventName="Earlier", host="Lee"),
                ],
            },
        )

    records = asyncio.run(_client(handler).list("events"))

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/v1/databases/db-1/collections/events/documents"
    assert request.headers["X-Appwrite-Project"] == "proj-1"
    assert "X-Appwrite-Key" not in request.headers
    queries = [json.loads(item) for item in request.url.params.get_list("queries[]")]
    assert queries == [{"method": "orderDesc", "attribute": "$createdAt"}]
    assert [record.record_id for record in records] == ["b", "a"]
    assert dict(records[0].values) == {"EventName": "Later", "host": "Kim"}
    assert records[0].created_at == "2024-05-01T10:00:00.000+00:00"
    assert records[0].collection_id == "events"


def test_list_serialises_custom_query() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"total": 0, "documents": []})

    query = ListQuery(order_attribute="time", descending=False, equals={"host": "Kim"}, limit=5)
    records = asyncio.run(_client(handler).list("events", query))

    assert records == []
    queries = [json.loads(item) for item in seen[0].url.params.get_list("queries[]")]
    assert queries == [
        {"method": "equal", "attribute": "host", "values": ["Kim"]},
        {"method": "orderAsc", "attribute": "time"},
        {"method": "limit", "values": [5]},
    ]


def test_create_posts_unique_id_and_data() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        payload = json.loads(request.content)
        return httpx.Response(201, json=_document("new-1", **payload["data"]))

    record = asyncio.run(_client(handler).create("events", {"EventName": "Launch"}))

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == _DOCUMENTS_URL
    assert json.loads(request.content) == {
        "documentId": "unique()",
        "data": {"EventName": "Launch"},
    }
    assert record.record_id == "new-1"
    assert record.get("EventName") == "Launch"


def test_update_patches_document_by_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_document("a", EventName="Renamed"))

    record = asyncio.run(_client(handler).update("events", "a", {"EventName": "Renamed"}))

    assert seen[0].method == "PATCH"
    assert str(seen[0].url) == f"{_DOCUMENTS_URL}/a"
    assert json.loads(seen[0].content) == {"data": {"EventName": "Renamed"}}
    assert record.get("EventName") == "Renamed"


def test_delete_accepts_empty_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    assert asyncio.run(_client(handler).delete("events", "a")) is None
    assert seen[0].method == "DELETE"
    assert str(seen[0].url) == f"{_DOCUMENTS_URL}/a"


def test_api_key_header_is_sent_when_configured() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_document("a"))

    settings = StoreSettings(
        endpoint="https://store.example.com/v1",
        project_id="proj-1",
        database_id="db-1",
        collection_id="events",
        api_key="secret",
    )
    asyncio.run(_client(handler, settings).get("events", "a"))

    assert seen[0].headers["X-Appwrite-Key"] == "secret"


def test_missing_document_raises_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "message": "Document with the requested ID could not be found.",
                "code": 404,
                "type": "document_not_found",
            },
        )

    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(_client(handler).get("events", "missing"))

    assert excinfo.value.code == 404
    assert excinfo.value.error_type == "document_not_found"


def test_invalid_structure_raises_validation_error() -> None:
    message = (
        'Invalid document structure: Attribute "EventName" has invalid type. '
        "Expected string."
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400, json={"message": message, "code": 400, "type": "document_invalid_structure"}
        )

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(_client(handler).create("events", {"EventName": 5}))

    assert excinfo.value.error_type == "document_invalid_structure"
    assert excinfo.value.message == message


def test_other_rejections_raise_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="unauthorized")

    with pytest.raises(BackendError) as excinfo:
        asyncio.run(_client(handler).list("events"))

    assert excinfo.value.code == 401
    assert "401" in excinfo.value.message


def test_network_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused"):
        asyncio.run(_client(handler).list("events"))


def test_protocol_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

    with pytest.raises(TransportError, match="redirects"):
        asyncio.run(_client(handler).get("events", "a"))


@pytest.mark.parametrize(
    "documents",
    [
        [{"EventName": "No id"}],
        [None],
        ["not-a-document"],
    ],
)
def test_malformed_list_documents_raise_store_error(documents: list[object]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"total": 1, "documents": documents})

    with pytest.raises(StoreError, match="malformed document") as excinfo:
        asyncio.run(_client(handler).list("events"))

    assert excinfo.value.details == {"total": 1, "documents": documents}


def test_malformed_single_document_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"EventName": "No id"})

    with pytest.raises(StoreError, match="malformed document"):
        asyncio.run(_client(handler).get("events", "a"))


def test_list_screen_reports_malformed_documents() -> None:
    notifications: list[tuple[object, str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"documents": [{"EventName": "x"}]})

    notifier = Notifier(
        presenter=lambda kind, title, message: notifications.append((kind, title, message))
    )
    screen = ListScreen(
        DEFAULT_SCHEMA, _client(handler), notifier, "events", confirm=lambda title, prompt: True
    )

    assert asyncio.run(screen.mount()) is False
    assert screen.state.last_error is not None
    assert notifications[0][2].startswith("Failed to fetch records. Store returned a malformed")
