"""Shared fixtures: in-memory bucket fakes and configuration files."""

import io
import threading
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from gcsbackup.config import BackupConfig

UPLOAD_CHUNK = 64 * 1024


@dataclass
class FakeUpload:
    """One call to ``upload_from_file``."""

    key: str
    timeout: float | None


class CommittingWriter(io.BytesIO):
    """Behaves like the real blob writer: closing it commits the buffer.

    ``IOBase.__del__`` closes it on garbage collection, so a writer that is
    simply dropped still creates the object.
    """

    def __init__(self, bucket: "FakeBucket", key: str):
        super().__init__()
        self.bucket = bucket
        self.key = key

    def close(self):
        if not self.closed:
            with self.bucket.lock:
                self.bucket.objects[self.key] = self.getvalue()
        super().close()


class FakeBlob:
    def __init__(self, bucket: "FakeBucket", name: str):
        self.bucket = bucket
        self.name = name

    def upload_from_file(self, file_obj, timeout: float | None = None):
        """Read the whole stream, then commit it in one go."""
        with self.bucket.lock:
            self.bucket.uploads.append(FakeUpload(self.name, timeout))

        data = bytearray()
        while True:
            chunk = file_obj.read(UPLOAD_CHUNK)
            if not chunk:
                break
            if self.bucket.should_fail(self.name, self.bucket.fail_write):
                raise ConnectionError("connection reset during write")
            data.extend(chunk)

        if self.bucket.should_fail(self.name, self.bucket.fail_close):
            raise ConnectionError("upload could not be finalized")

        with self.bucket.lock:
            self.bucket.objects[self.name] = bytes(data)

    def open(self, mode: str = "r", timeout: float | None = None):
        assert mode == "wb"
        return CommittingWriter(self.bucket, self.name)


class FakeBucket:
    """Stand-in for a Cloud Storage bucket.

    Keys ending with any suffix in ``fail_write`` fail while data is sent;
    those in ``fail_close`` fail when the upload is finalized.
    """

    def __init__(self, name: str = "test-bucket", fail_write=(), fail_close=()):
        self.name = name
        self.fail_write = tuple(fail_write)
        self.fail_close = tuple(fail_close)
        self.lock = threading.Lock()
        self.objects: dict[str, bytes] = {}
        self.uploads: list[FakeUpload] = []

    @staticmethod
    def should_fail(key: str, suffixes: tuple) -> bool:
        return any(key.endswith(suffix) for suffix in suffixes)

    def blob(self, name: str) -> FakeBlob:
        return FakeBlob(self, name)


@pytest.fixture
def bucket():
    return FakeBucket()


@pytest.fixture
def console():
    """Console writing plain text to an in-memory buffer."""
    return Console(file=io.StringIO(), width=500, soft_wrap=True)


def console_text(console: Console) -> str:
    return console.file.getvalue()


def make_files(root: Path, count: int, prefix: str = "file") -> list[str]:
    """Create ``count`` small files under ``root`` and return their paths."""
    root.mkdir(parents=True, exist_ok=True)
    paths = []
    for i in range(count):
        path = root / f"{prefix}{i:03d}.txt"
        path.write_bytes(f"content of {i}\n".encode())
        paths.append(str(path))
    return paths


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / "key.json"
    path.write_text('{"type": "service_account"}')
    return path


@pytest.fixture
def backup_config(tmp_path, credentials_file):
    return BackupConfig(
        directories=[str(tmp_path / "data")],
        googleCloud={"nameBucket": "test-bucket", "pathJsonKey": str(credentials_file)},
    )


@pytest.fixture
def write_config(tmp_path, credentials_file):
    """Write a YAML config file and return its path."""

    def _write(text: str | None = None, directories=None) -> Path:
        if text is None:
            dirs = directories or [str(tmp_path / "data")]
            dir_lines = "\n".join(f"  - {d}" for d in dirs)
            text = (
                f"directories:\n{dir_lines}\n"
                "googleCloud:\n"
                "  nameBucket: test-bucket\n"
                f"  pathJsonKey: {credentials_file}\n"
            )
        path = tmp_path / "conf.yaml"
        path.write_text(text)
        return path

    return _write
