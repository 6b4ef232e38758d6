"""Firebase app initialization and Cloud Storage bucket access."""

import firebase_admin
from firebase_admin import credentials, storage

from gcsbackup.config import GoogleCloudConfig
from gcsbackup.errors import StorageSetupError

_app: firebase_admin.App | None = None


def init_firebase(config: GoogleCloudConfig) -> firebase_admin.App:
    """Initialize Firebase app with the given config."""
    global _app

    if _app is not None:
        return _app

    if not config.path_json_key.exists():
        raise StorageSetupError(f"Credentials file not found: {config.path_json_key}")

    try:
        cred = credentials.Certificate(str(config.path_json_key))
        _app = firebase_admin.initialize_app(cred, {"storageBucket": config.name_bucket})
    except (ValueError, OSError) as e:
        raise StorageSetupError(f"Initializing storage client: {e}") from e

    return _app


def get_bucket(config: GoogleCloudConfig):
    """Get the destination Cloud Storage bucket."""
    app = init_firebase(config)
    try:
        return storage.bucket(config.name_bucket, app=app)
    except ValueError as e:
        raise StorageSetupError(f"Opening bucket {config.name_bucket}: {e}") from e


def reset_client():
    """Reset the Firebase app (useful for testing or switching credentials)."""
    global _app
    if _app is not None:
        firebase_admin.delete_app(_app)
        _app = None
