import re
import time

import pytest

from jobboard.errors import StoreError
from jobboard.services import storage_service

from conftest import upload


def test_upload_uses_timestamped_random_name(app):
    path = storage_service.upload_object(upload("My CV.PDF"), "applications/acme")

    assert re.fullmatch(r"applications/acme/\d{13}-\d{1,7}\.pdf", path)
    assert storage_service.open_object("resumes", path).read_bytes() == b"%PDF-1.4 test"


def test_upload_rejects_empty_file(app):
    with pytest.raises(StoreError, match="Empty filename"):
        storage_service.upload_object(upload(name=""), "applications/acme")


def test_paths_cannot_escape_the_bucket(app):
    with pytest.raises(StoreError, match="Invalid object path"):
        storage_service.open_object("resumes", "../../etc/passwd")


def test_signed_url_roundtrip(app):
    path = storage_service.upload_object(upload(), "applications/acme")
    url = storage_service.create_signed_url(
        path, 60, bucket="resumes", service_key="k", base_url="http://localhost/storage/"
    )
    assert url.startswith("http://localhost/storage/object/")

    token = url.rsplit("/", 1)[1]
    assert storage_service.resolve_signed_token(token, service_key="k") == ("resumes", path)
    with pytest.raises(StoreError, match="Invalid signature"):
        storage_service.resolve_signed_token(token, service_key="other")


def test_signed_url_expires(app, monkeypatch):
    path = storage_service.upload_object(upload(), "applications/acme")
    url = storage_service.create_signed_url(path, 5, bucket="resumes", service_key="k", base_url="http://x")
    token = url.rsplit("/", 1)[1]

    real_time = time.time
    monkeypatch.setattr(storage_service.time, "time", lambda: real_time() + 60)
    with pytest.raises(StoreError, match="expired"):
        storage_service.resolve_signed_token(token, service_key="k")


def test_signed_url_requires_existing_object(app):
    with pytest.raises(StoreError, match="Object not found"):
        storage_service.create_signed_url("applications/none.pdf", 60, bucket="resumes",
                                          service_key="k", base_url="http://x")


def test_signed_object_route_serves_file(client, app):
    path = storage_service.upload_object(upload(), "applications/acme")
    url = storage_service.create_signed_url(path, 60, bucket="resumes",
                                            service_key=app.config["STORAGE_SERVICE_KEY"],
                                            base_url="/storage")
    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.data == b"%PDF-1.4 test"
    assert resp.headers["Cache-Control"] == "private, no-store"

    assert client.get("/storage/object/garbage").status_code == 403


def test_delete_object_is_idempotent(app):
    path = storage_service.upload_object(upload(), "applications/acme")

    storage_service.delete_object("resumes", path)
    storage_service.delete_object("resumes", path)

    with pytest.raises(StoreError, match="Object not found"):
        storage_service.open_object("resumes", path)
