import io
import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from lawdesk.core.errors import BadRequestError, NotFoundError, PayloadTooLargeError
from lawdesk.core.hashing import sha256_bytes


def test_save_writes_under_firm_directory(storage):
    data = b"%PDF-1.4 hello"
    stored = storage.save(
        law_firm_id=42,
        original_name="../../etc/Contract.PDF",
        mime_type="application/pdf; charset=binary",
        stream=io.BytesIO(data),
    )

    path = os.path.abspath(stored.path)
    firm_dir = os.path.abspath(os.path.join(str(storage.upload_dir), "42"))
    assert os.path.dirname(path) == firm_dir
    assert path.endswith(".pdf")

    # Directory components of the client-supplied name are dropped
    assert stored.file_name == "Contract.PDF"
    assert stored.file_size == len(data)
    assert stored.mime_type == "application/pdf"
    assert stored.checksum == sha256_bytes(data)
    with open(path, "rb") as fh:
        assert fh.read() == data


def test_generated_names_are_unique(storage):
    a = storage.save(law_firm_id=1, original_name="a.txt", mime_type="text/plain", stream=io.BytesIO(b"x"))
    b = storage.save(law_firm_id=1, original_name="a.txt", mime_type="text/plain", stream=io.BytesIO(b"x"))
    assert a.path != b.path


def test_rejects_disallowed_type(storage):
    with pytest.raises(BadRequestError) as exc_info:
        storage.save(law_firm_id=1, original_name="x.exe", mime_type="application/x-msdownload", stream=io.BytesIO(b"MZ"))
    assert exc_info.value.message == "Invalid file type"

    with pytest.raises(BadRequestError):
        storage.validate_type(None)


def test_rejects_empty_and_oversized_files(storage):
    with pytest.raises(BadRequestError) as exc_info:
        storage.save(law_firm_id=1, original_name="e.txt", mime_type="text/plain", stream=io.BytesIO(b""))
    assert exc_info.value.message == "File is empty"

    too_big = b"a" * (storage.max_bytes + 1)
    with pytest.raises(PayloadTooLargeError) as exc_info:
        storage.save(law_firm_id=1, original_name="big.txt", mime_type="text/plain", stream=io.BytesIO(too_big))
    assert exc_info.value.status_code == 413

    # Exactly at the ceiling is fine
    exact = storage.save(
        law_firm_id=1, original_name="ok.txt", mime_type="text/plain", stream=io.BytesIO(b"a" * storage.max_bytes)
    )
    assert exact.file_size == storage.max_bytes


def test_resolve_and_delete(storage):
    stored = storage.save(law_firm_id=1, original_name="r.txt", mime_type="text/plain", stream=io.BytesIO(b"data"))

    assert storage.resolve(stored.path).is_file()
    assert storage.delete(stored.path) is True

    # Second delete reports the file was already gone
    assert storage.delete(stored.path) is False
    with pytest.raises(NotFoundError):
        storage.resolve(stored.path)
