import io

import pytest

from jobboard.errors import StoreError
from jobboard.models.careers import Application
from jobboard.services import store, storage_service

from conftest import FakeResponse


def _form(**overrides):
    data = {
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": "555-0101",
        "location": "London",
        "how_heard": "referral",
        "why_interested": "Engines",
        "experience": "Analytical",
        "agree_data_sharing": "y",
        "submission_token": "token-1",
        "resume": (io.BytesIO(b"%PDF resume"), "cv.pdf"),
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


@pytest.fixture
def no_store_writes(monkeypatch):
    def forbidden(*a, **kw):
        raise AssertionError("store must not be touched")
    monkeypatch.setattr(store, "insert_application", forbidden)
    monkeypatch.setattr(storage_service, "upload_object", forbidden)


def test_detail_renders_sections(client, make_job):
    make_job(slug="platform", title="Platform Engineer",
             responsibilities="Ship code\nReview code", benefits="Remote")
    html = client.get("/jobs/platform").get_data(as_text=True)

    assert "Platform Engineer" in html
    assert "<p>Ship code</p><p>Review code</p>" in html
    assert "Benefits" in html
    assert "Qualifications" not in html
    assert 'name="submission_token"' in html


def test_unknown_slug_shows_not_found_and_no_form(client):
    resp = client.get("/jobs/S")
    html = resp.get_data(as_text=True)

    assert resp.status_code == 404
    assert "Job not found" in html
    assert "<form method=\"post\"" not in html


def test_detail_store_error_is_shown(client, monkeypatch):
    def boom(slug):
        raise StoreError("connection refused")
    monkeypatch.setattr(store, "get_job_by_slug", boom)

    resp = client.get("/jobs/anything")
    assert resp.status_code == 500
    assert "connection refused" in resp.get_data(as_text=True)


def test_missing_consent_is_rejected_before_any_store_call(client, make_job, no_store_writes):
    make_job(slug="platform")
    resp = client.post("/jobs/platform", data=_form(agree_data_sharing=None),
                       content_type="multipart/form-data")

    assert resp.status_code == 400
    assert "Please agree to share your data for recruitment purposes." in resp.get_data(as_text=True)


def test_missing_resume_is_rejected_before_any_store_call(client, make_job, no_store_writes):
    make_job(slug="platform")
    resp = client.post("/jobs/platform", data=_form(resume=None), content_type="multipart/form-data")

    html = resp.get_data(as_text=True)
    assert resp.status_code == 400
    assert "Please fill in all required fields and upload your resume." in html
    # what the candidate typed is kept
    assert 'value="Ada Lovelace"' in html


def test_successful_submission(client, app, make_job, outbound):
    job = make_job(slug="acme", title="Acme Engineer")
    resp = client.post(
        "/jobs/acme",
        data=_form(cover_letter=(io.BytesIO(b"hello"), "letter.docx")),
        content_type="multipart/form-data",
        follow_redirects=True,
    )

    html = resp.get_data(as_text=True)
    assert "Application submitted successfully. Thank you!" in html
    assert 'value="Ada Lovelace"' not in html  # form reset

    saved = Application.query.one()
    assert saved.job_id == job.id
    assert saved.status == "submitted"
    assert saved.agree_data_sharing is True
    assert saved.resume_path.startswith("applications/acme/") and saved.resume_path.endswith(".pdf")
    assert saved.cover_letter_path.endswith(".docx")
    assert storage_service.open_object("resumes", saved.resume_path).read_bytes() == b"%PDF resume"

    (call,) = outbound.calls
    assert call["url"] == "http://functions.test/send-application-email"
    assert call["json"]["application"]["id"] == saved.id
    assert call["json"]["job"]["title"] == "Acme Engineer"


def test_notification_failure_never_blocks_success(client, make_job, outbound):
    make_job(slug="acme")
    outbound.responses["send-application-email"] = FakeResponse(500, {"error": "SendGrid error"})

    resp = client.post("/jobs/acme", data=_form(), content_type="multipart/form-data", follow_redirects=True)

    assert "Application submitted successfully. Thank you!" in resp.get_data(as_text=True)
    assert Application.query.count() == 1


def test_notification_network_error_is_swallowed(client, make_job, outbound):
    import requests
    make_job(slug="acme")
    outbound.responses["send-application-email"] = requests.ConnectionError("down")

    resp = client.post("/jobs/acme", data=_form(), content_type="multipart/form-data", follow_redirects=True)

    assert "Application submitted successfully. Thank you!" in resp.get_data(as_text=True)
    assert Application.query.count() == 1


def test_no_function_base_skips_notification(client, app, make_job, outbound):
    app.config["FUNCTION_BASE"] = ""
    make_job(slug="acme")

    client.post("/jobs/acme", data=_form(), content_type="multipart/form-data")

    assert Application.query.count() == 1
    assert outbound.calls == []


def test_double_submit_creates_one_application(client, make_job, outbound):
    make_job(slug="acme")
    for _ in range(2):
        resp = client.post("/jobs/acme", data=_form(), content_type="multipart/form-data")
        assert resp.status_code == 302

    assert Application.query.count() == 1
    assert len(outbound.calls) == 1


def test_upload_failure_aborts_and_keeps_form(client, make_job, monkeypatch, outbound):
    make_job(slug="acme")

    def broken(fs, folder, bucket=None):
        raise StoreError("Bucket not found")
    monkeypatch.setattr(storage_service, "upload_object", broken)

    resp = client.post("/jobs/acme", data=_form(), content_type="multipart/form-data")

    html = resp.get_data(as_text=True)
    assert resp.status_code == 500
    assert "Bucket not found" in html
    assert 'value="Ada Lovelace"' in html
    assert Application.query.count() == 0
    assert outbound.calls == []


def test_unknown_how_heard_counts_as_missing(client, make_job, no_store_writes):
    make_job(slug="acme")
    resp = client.post("/jobs/acme", data=_form(how_heard="carrier-pigeon"),
                       content_type="multipart/form-data")
    assert "Please fill in all required fields" in resp.get_data(as_text=True)


def test_concurrent_duplicate_submit_reports_success(client, app, make_job, outbound, monkeypatch):
    from pathlib import Path

    make_job(slug="acme")
    first = client.post("/jobs/acme", data=_form(submission_token="tok-race"),
                        content_type="multipart/form-data")
    assert first.status_code == 302

    # the other request has not committed yet when this one looks the token up
    monkeypatch.setattr(store, "find_application_by_token", lambda token: None)
    second = client.post("/jobs/acme", data=_form(submission_token="tok-race"),
                         content_type="multipart/form-data")

    assert second.status_code == 302
    assert Application.query.count() == 1
    assert len(outbound.calls) == 1
    stored = list((Path(app.config["STORAGE_ROOT"]) / "resumes" / "applications" / "acme").iterdir())
    assert [p.name for p in stored] == [Application.query.one().resume_path.rsplit("/", 1)[1]]
