"""
Firebase Admin app factory.

The identity verifier and account flows share one initialized
firebase_admin App, created lazily from settings.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from .config import get_settings

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "atelier"

_app: Optional[firebase_admin.App] = None


def get_firebase_app() -> firebase_admin.App:
    """
    Get the cached Firebase Admin app.

    Uses the service account file from FIREBASE_CREDENTIALS_PATH when set,
    otherwise Google application default credentials.
    """
    global _app

    if _app is None:
        settings = get_settings()
        if settings.firebase_credentials_path:
            cred = credentials.Certificate(settings.firebase_credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        _app = firebase_admin.initialize_app(cred, options, name=FIREBASE_APP_NAME)
        logger.info(f"Initialized Firebase app for project {settings.firebase_project_id or '<default>'}")

    return _app


def reset_firebase_app() -> None:
    """Delete the cached Firebase app so the next call re-initializes it."""
    global _app
    if _app is not None:
        firebase_admin.delete_app(_app)
    _app = None
