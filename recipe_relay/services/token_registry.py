"""Registries of pending confirmation tokens.

Tokens are single use: ``consume`` looks a token up and deletes it in one
step. Firestore documents are keyed by the token string and hold the user ID
under ``uid`` (``userId`` is also accepted) plus an optional ``expiresAt``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime
from typing import Any, Dict, Optional, Protocol

from google.cloud.firestore_v1 import transactional

from recipe_relay.models.auth import TokenRecord
from recipe_relay.services.firebase_admin_init import get_firestore_client

logger = logging.getLogger(__name__)


class TokenRegistry(Protocol):
    purpose: str

    async def consume(self, token: str) -> Optional[TokenRecord]:
        """Return and delete the record for ``token``, or None if unknown."""
        ...

    async def restore(self, record: TokenRecord) -> None:
        """Put a consumed token back so it can be redeemed again."""
        ...


def _record_from_document(token: str, purpose: str, data: Dict[str, Any]) -> TokenRecord:
    return TokenRecord(
        token=token,
        uid=data.get("uid") or data.get("userId") or "",
        purpose=purpose,
        expires_at=data.get("expiresAt"),
        data=dict(data),
    )


def _document_from_record(record: TokenRecord) -> Dict[str, Any]:
    return dict(record.data) or {"uid": record.uid, "expiresAt": record.expires_at}


@transactional
def _get_and_delete(transaction, doc_ref) -> Optional[Dict[str, Any]]:
    snapshot = doc_ref.get(transaction=transaction)
    if not snapshot.exists:
        return None
    transaction.delete(doc_ref)
    return snapshot.to_dict() or {}


class FirestoreTokenRegistry:
    """Token registry stored in one Firestore collection."""

    def __init__(self, collection: str, purpose: str, client=None):
        self.collection = collection
        self.purpose = purpose
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_firestore_client()
        return self._client

    def _consume_sync(self, token: str) -> Optional[Dict[str, Any]]:
        doc_ref = self.client.collection(self.collection).document(token)
        return _get_and_delete(self.client.transaction(), doc_ref)

    async def consume(self, token: str) -> Optional[TokenRecord]:
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._consume_sync, token)
        if data is None:
            logger.info(f"Token not found in {self.collection}")
            return None
        logger.info(f"Consumed token from {self.collection}")
        return _record_from_document(token, self.purpose, data)

    def _restore_sync(self, record: TokenRecord) -> None:
        doc_ref = self.client.collection(self.collection).document(record.token)
        doc_ref.set(_document_from_record(record))

    async def restore(self, record: TokenRecord) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._restore_sync, record)
        logger.info(f"Restored token to {self.collection}")


class InMemoryTokenRegistry:
    """Process-local token registry for development and tests."""

    def __init__(self, purpose: str):
        self.purpose = purpose
        self._tokens: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def add(self, token: str, uid: str, expires_at: Optional[datetime] = None) -> None:
        with self._lock:
            self._tokens[token] = {"uid": uid, "expiresAt": expires_at}

    def __contains__(self, token: str) -> bool:
        return token in self._tokens

    async def consume(self, token: str) -> Optional[TokenRecord]:
        with self._lock:
            data = self._tokens.pop(token, None)
        if data is None:
            return None
        return _record_from_document(token, self.purpose, data)

    async def restore(self, record: TokenRecord) -> None:
        with self._lock:
            self._tokens[record.token] = _document_from_record(record)
