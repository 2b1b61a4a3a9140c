import io
from datetime import datetime, timedelta

import pytest
from werkzeug.datastructures import FileStorage

from jobboard import create_app
from jobboard.config import Config
from jobboard.dialogs import Dialogs
from jobboard.extensions import db as _db
from jobboard.models.careers import Job, JobType, Application


class TestConfig(Config):
    __test__ = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SECURE = False
    STRICT_SETTINGS = False
    LOG_LEVEL = "WARNING"
    ADMIN_SECRET = "open-sesame"
    FUNCTION_BASE = "http://functions.test"
    FUNCTION_TIMEOUT = None
    STORAGE_BUCKET = "resumes"
    STORAGE_URL = "http://localhost/storage"
    STORAGE_SERVICE_KEY = "service-role-key"
    MAIL_PASSWORD = "sendgrid-key"
    MAIL_DEFAULT_SENDER = "jobs@example.com"
    APPLICATION_EMAIL_TO = "hiring@example.com"
    MAIL_SUPPRESS_SEND = False


@pytest.fixture
def app(tmp_path):
    cfg = type("LocalTestConfig", (TestConfig,), {
        "STORAGE_ROOT": str(tmp_path / "storage"),
        "LOG_DIR": str(tmp_path / "logs"),
    })
    app = create_app(cfg)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    with client.session_transaction() as sess:
        sess["admin_unlocked"] = True
    return client


@pytest.fixture
def make_job(app):
    counter = {"n": 0}

    def _make(**kw):
        counter["n"] += 1
        n = counter["n"]
        kw.setdefault("title", f"Engineer {n}")
        kw.setdefault("slug", f"engineer-{n}")
        kw.setdefault("short_description", "Build things")
        kw.setdefault("location", "Remote")
        kw.setdefault("salary", "$100k")
        kw.setdefault("status", "active")
        kw.setdefault("created_at", datetime(2024, 1, 1) + timedelta(days=n))
        job = Job(**kw)
        _db.session.add(job)
        _db.session.commit()
        return job
    return _make


@pytest.fixture
def make_application(app):
    counter = {"n": 0}

    def _make(job=None, **kw):
        counter["n"] += 1
        n = counter["n"]
        kw.setdefault("full_name", f"Applicant {n}")
        kw.setdefault("email", f"applicant{n}@example.com")
        kw.setdefault("phone_number", "555-0100")
        kw.setdefault("location", "Berlin")
        kw.setdefault("how_heard", "linkedin")
        kw.setdefault("why_interested", "Love the mission")
        kw.setdefault("experience", "5 years")
        kw.setdefault("resume_path", f"applications/x/{n}.pdf")
        kw.setdefault("agree_data_sharing", True)
        kw.setdefault("created_at", datetime(2024, 2, 1) + timedelta(days=n))
        app_ = Application(job_id=job.id if job else None, **kw)
        _db.session.add(app_)
        _db.session.commit()
        return app_
    return _make


@pytest.fixture
def make_job_type(app):
    def _make(name="Full-time"):
        jt = JobType(name=name)
        _db.session.add(jt)
        _db.session.commit()
        return jt
    return _make


def upload(name="resume.pdf", data=b"%PDF-1.4 test"):
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type="application/octet-stream")


class ScriptedDialogs(Dialogs):
    """Answers prompts from a list and records everything shown."""

    def __init__(self, answers=(), confirms=()):
        self.answers = list(answers)
        self.confirms = list(confirms)
        self.alerts = []
        self.asked = []

    def request(self, message):
        self.asked.append(message)
        return self.answers.pop(0) if self.answers else None

    def confirm(self, message):
        self.asked.append(message)
        return self.confirms.pop(0) if self.confirms else False

    def alert(self, message):
        self.alerts.append(message)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def outbound(monkeypatch):
    """Capture requests.post calls made to the handlers."""
    calls = []
    responses = {}

    def fake_post(url, json=None, **kwargs):
        calls.append({"url": url, "json": json, "kwargs": kwargs})
        for suffix, resp in responses.items():
            if url.endswith(suffix):
                if isinstance(resp, Exception):
                    raise resp
                return resp
        return FakeResponse(200, {"ok": True})

    monkeypatch.setattr("jobboard.services.functions_client.requests.post", fake_post)
    fake_post.calls = calls
    fake_post.responses = responses
    return fake_post
