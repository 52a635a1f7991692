"""Document store HTTP client service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Protocol

import httpx

from simple_record_forms.configuration.runtime_settings import StoreSettings

from .store_errors import StoreError, TransportError, error_from_response
from .store_models import ListQuery, Record

logger = logging.getLogger(__name__)

UNIQUE_ID = "unique()"


class RecordStore(Protocol):
    """Protocol implemented by both the HTTP client and in-memory fakes."""

    async def list(
        self, collection_id: str, query: ListQuery | None = None
    ) -> Sequence[Record]: ...

    async def get(self, collection_id: str, record_id: str) -> Record: ...

    async def create(self, collection_id: str, fields: Mapping[str, Any]) -> Record: ...

    async def update(
        self, collection_id: str, record_id: str, fields: Mapping[str, Any]
    ) -> Record: ...

    async def delete(self, collection_id: str, record_id: str) -> None: ...


class DocumentStoreClient:
    """Async facade over the document database REST API.

    One instance is bound to a single database; collections are addressed per
    call. Requests are single-shot and use the transport's default timeout.
    """

    def __init__(
        self,
        settings: StoreSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._headers = {
            "X-Appwrite-Project": settings.project_id,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if settings.api_key:
            self._headers["X-Appwrite-Key"] = settings.api_key

    async def __aenter__(self) -> DocumentStoreClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def list(
        self, collection_id: str, query: ListQuery | None = None
    ) -> Sequence[Record]:
        """Return the collection's documents, newest first unless ``query`` says otherwise."""
        resolved_query = query or ListQuery()
        params = [("queries[]", item) for item in resolved_query.to_query_strings()]
        body = await self._request("GET", self._documents_url(collection_id), params=params)
        documents = body.get("documents") if isinstance(body, Mapping) else None
        if not isinstance(documents, list):
            raise StoreError("Store listing response is missing 'documents'.", details=body)
        return [_to_record(document, body) for document in documents]

    async def get(self, collection_id: str, record_id: str) -> Record:
        body = await self._request("GET", self._document_url(collection_id, record_id))
        return _to_record(body, body)

    async def create(self, collection_id: str, fields: Mapping[str, Any]) -> Record:
        body = await self._request(
            "POST",
            self._documents_url(collection_id),
            json={"documentId": UNIQUE_ID, "data": dict(fields)},
        )
        return _to_record(body, body)

    async def update(
        self, collection_id: str, record_id: str, fields: Mapping[str, Any]
    ) -> Record:
        """Merge ``fields`` into the stored document by key."""
        body = await self._request(
            "PATCH",
            self._document_url(collection_id, record_id),
            json={"data": dict(fields)},
        )
        return _to_record(body, body)

    async def delete(self, collection_id: str, record_id: str) -> None:
        await self._request("DELETE", self._document_url(collection_id, record_id))

    def _documents_url(self, collection_id: str) -> str:
        endpoint = self._settings.endpoint.rstrip("/")
        return (
            f"{endpoint}/databases/{self._settings.database_id}"
            f"/collections/{collection_id}/documents"
        )

    def _document_url(self, collection_id: str, record_id: str) -> str:
        return f"{self._documents_url(collection_id)}/{record_id}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("Store request %s %s", method, url)
        try:
            response = await self._http.request(method, url, headers=self._headers, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"Could not reach the store: {exc}", details=exc) from exc

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return {}
            return _decode_json(response)
        try:
            body = response.json()
        except ValueError:
            body = response.text
        raise error_from_response(response.status_code, body)


def _to_record(document: Any, body: Any) -> Record:
    try:
        return Record.from_document(document)
    except (ValueError, AttributeError, TypeError) as exc:
        raise StoreError(f"Store returned a malformed document: {exc}", details=body) from exc


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise StoreError(
            "Store returned a response that is not valid JSON.",
            code=response.status_code,
            details=response.text,
        ) from exc
