"""Firebase Admin SDK initialization (singleton)."""

import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

from recipe_relay.config import settings
from recipe_relay.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_app: Optional[firebase_admin.App] = None
_db = None


def _load_credentials() -> Optional[credentials.Base]:
    """Pick credentials: inline service account JSON, then a key file, then none."""
    if settings.firebase_service_account:
        try:
            info = json.loads(settings.firebase_service_account)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e}") from e
        return credentials.Certificate(info)

    if settings.google_application_credentials:
        return credentials.Certificate(settings.google_application_credentials)

    return None


def init_firebase() -> firebase_admin.App:
    """Initialize Firebase Admin SDK if not already initialized."""
    global _app
    if _app is not None:
        return _app

    try:
        _app = firebase_admin.get_app()
        return _app
    except ValueError:
        pass

    try:
        cred = _load_credentials()
        if cred is not None:
            _app = firebase_admin.initialize_app(cred)
        else:
            # In Cloud Run / GCE, default credentials are available automatically.
            _app = firebase_admin.initialize_app()
        logger.info("Firebase Admin SDK initialized")
    except (ValueError, IOError) as e:
        logger.error(f"Firebase Admin SDK init failed: {e}")
        raise ConfigurationError(f"Firebase Admin SDK init failed: {e}") from e
    return _app


def get_firestore_client():
    """Return a Firestore client, initializing Firebase if needed."""
    global _db
    if _db is None:
        init_firebase()
        _db = firestore.client()
    return _db
