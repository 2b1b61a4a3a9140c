# jobboard/services/storage_service.py
import os
import random
import time
from pathlib import Path

from flask import current_app
from itsdangerous import URLSafeSerializer, BadSignature
from werkzeug.utils import secure_filename

from ..errors import StoreError

_SIGNING_SALT = "signed-object"


def _storage_root() -> Path:
    # Fallback to <instance>/storage if STORAGE_ROOT not configured
    base = current_app.config.get("STORAGE_ROOT")
    if not base:
        base = Path(current_app.instance_path) / "storage"
    return Path(base)

def _bucket_root(bucket: str) -> Path:
    safe = secure_filename(bucket or "")
    if not safe:
        raise StoreError("Bucket not found")
    return _storage_root() / safe

def _safe_abs_path(bucket: str, relpath: str) -> Path:
    base = os.path.normpath(_bucket_root(bucket))
    abs_path = os.path.normpath(os.path.join(base, relpath or ""))
    if not abs_path.startswith(base + os.sep):
        raise StoreError("Invalid object path")
    return Path(abs_path)

def object_name(filename: str, folder: str) -> str:
    """<folder>/<timestamp-ms>-<random-int>.<ext>, the extension kept from the upload."""
    ext = secure_filename((filename or "").rsplit(".", 1)[-1]).lower() or "bin"
    name = f"{int(time.time() * 1000)}-{random.randint(0, 1_000_000)}.{ext}"
    return f"{folder.strip('/')}/{name}" if folder else name

def upload_object(file_storage, folder: str, bucket: str | None = None) -> str:
    """
    Saves file into the private bucket under a generated name, returns its path.
    Never overwrites an existing object.
    """
    bucket = bucket or current_app.config.get("STORAGE_BUCKET")
    if not file_storage or not file_storage.filename:
        raise StoreError("Empty filename")

    path = object_name(file_storage.filename, folder)
    dest = _safe_abs_path(bucket, path)
    if dest.exists():
        raise StoreError("The resource already exists")
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        file_storage.save(dest)
    except OSError as e:
        raise StoreError(f"Upload failed: {e.strerror or e}") from e

    current_app.logger.info("Stored object %s/%s", bucket, path)
    return path

def open_object(bucket: str, path: str) -> Path:
    abs_path = _safe_abs_path(bucket, path)
    if not abs_path.is_file():
        raise StoreError("Object not found")
    return abs_path

def delete_object(bucket: str, path: str) -> None:
    """Remove an object; a missing one is not an error."""
    try:
        _safe_abs_path(bucket, path).unlink(missing_ok=True)
    except OSError as e:
        raise StoreError(f"Delete failed: {e.strerror or e}") from e


# ---- Signed URLs ----

def _serializer(service_key: str) -> URLSafeSerializer:
    return URLSafeSerializer(secret_key=service_key, salt=_SIGNING_SALT)

def create_signed_url(path: str, expires: int, *, bucket: str, service_key: str, base_url: str) -> str:
    """Mint a URL granting read access to one object for ``expires`` seconds."""
    open_object(bucket, path)  # must exist
    token = _serializer(service_key).dumps({"b": bucket, "p": path, "e": int(time.time()) + int(expires)})
    return f"{base_url.rstrip('/')}/object/{token}"

def resolve_signed_token(token: str, *, service_key: str) -> tuple[str, str]:
    """Return (bucket, path) for a valid, unexpired token."""
    try:
        data = _serializer(service_key).loads(token)
    except BadSignature as e:
        raise StoreError("Invalid signature") from e
    if not isinstance(data, dict) or int(data.get("e", 0)) < time.time():
        raise StoreError("Signed URL has expired")
    return data["b"], data["p"]
