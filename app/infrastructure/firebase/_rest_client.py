"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps serverless bundle small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from app.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
    encode_fields,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_LIST_PAGE_SIZE = 300


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestorePermissionError(PermissionError):
    """Raised on 403 (PERMISSION_DENIED); callers must not retry."""


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict[str, Any] | list[tuple[str, str]] | None = None,
) -> dict | None:
    """Perform async HTTP request to Firestore REST API.

    404 returns None for GET and DELETE only; a 404 on PATCH or POST means a
    precondition failed (e.g. currentDocument.exists) and is raised.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers, params=params)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body, params=params)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body, params=params)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers, params=params)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404 and method in ("GET", "DELETE"):
        return None
    if resp.status_code == 403:
        raise FirestorePermissionError(f"PERMISSION_DENIED: {method} {url}")
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Update only the given top-level fields; the document must exist."""
        params = [("updateMask.fieldPaths", k) for k in data]
        params.append(("currentDocument.exists", "true"))
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection (shallow), following page tokens."""
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": _LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                f"{_BASE}/{self._path}",
                access_token=await self._client.get_token(),
                params=params,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                doc_id = name.split("/")[-1] if name else ""
                yield DocumentSnapshot(doc_id, decode_document(doc.get("fields")))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def _document_name(self, path: str) -> str:
        return path if path.startswith(self._prefix) else f"{self._prefix}/{path}"

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Apply writes atomically via documents:commit (all or nothing).

        Each write is a dict with "path" (collection/doc, relative to the
        database) and one of:
            "data": full document set,
            "update": partial update of the listed fields (document must exist),
            "delete": True.
        """
        if not writes:
            return
        encoded: list[dict[str, Any]] = []
        for w in writes:
            name = self._document_name(w["path"])
            if w.get("delete"):
                encoded.append({"delete": name})
            elif "update" in w:
                encoded.append({
                    "update": {"name": name, "fields": encode_fields(w["update"])},
                    "updateMask": {"fieldPaths": list(w["update"].keys())},
                    "currentDocument": {"exists": True},
                })
            else:
                encoded.append({"update": {"name": name, "fields": encode_fields(w["data"])}})
        await _request_async(
            self._http,
            f"{_BASE}/{self._prefix}:commit",
            method="POST",
            body={"writes": encoded},
            access_token=await self.get_token(),
        )
