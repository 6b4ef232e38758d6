"""Cloud Storage client and upload operations."""

from gcsbackup.storage.client import get_bucket, init_firebase, reset_client
from gcsbackup.storage.upload import TransferTimeout, stream_file

__all__ = [
    "get_bucket",
    "init_firebase",
    "reset_client",
    "stream_file",
    "TransferTimeout",
]
