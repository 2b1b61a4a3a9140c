# jobboard/services/admin_service.py
from __future__ import annotations
import hmac
import logging
from dataclasses import dataclass, field

from ..errors import JobBoardError, ConfigurationError, NetworkError
from . import store, functions_client

log = logging.getLogger(__name__)

SECRET_PROMPT = "Enter admin secret to continue:"
BAD_SECRET = "Incorrect admin secret."


@dataclass
class DashboardData:
    jobs: list = field(default_factory=list)
    job_types: list = field(default_factory=list)
    applications: list = field(default_factory=list)


def authorize(dialogs, expected_secret: str) -> bool:
    attempt = dialogs.request(SECRET_PROMPT)
    if attempt and expected_secret and hmac.compare_digest(attempt.encode(), expected_secret.encode()):
        return True
    if getattr(dialogs, "pending", None):
        return False
    dialogs.alert(BAD_SECRET)
    return False

def load_dashboard() -> DashboardData:
    # one session, so the three lists come from a single consistent read
    return DashboardData(
        jobs=store.list_jobs(),
        job_types=store.list_job_types(),
        applications=store.list_applications(),
    )

def _confirmed_delete(dialogs, message: str, op, ident) -> bool:
    if not dialogs.confirm(message):
        return False
    try:
        op(ident)
    except JobBoardError as e:
        dialogs.alert(f"Delete failed: {e.message}")
        return False
    return True

def delete_job(dialogs, job_id: int) -> bool:
    return _confirmed_delete(dialogs, "Delete this job?", store.delete_job, job_id)

def delete_job_type(dialogs, type_id: int) -> bool:
    return _confirmed_delete(
        dialogs,
        "Delete job type? This will not delete jobs but may leave job_type_id null.",
        store.delete_job_type,
        type_id,
    )

def delete_application(dialogs, app_id: int) -> bool:
    return _confirmed_delete(dialogs, "Delete this application?", store.delete_application, app_id)

def create_job_type(dialogs):
    name = dialogs.request("New job type name:")
    if not name:
        return None
    try:
        return store.create_job_type(name)
    except JobBoardError as e:
        dialogs.alert(f"Create failed: {e.message}")
        return None

def open_signed_url(dialogs, path: str):
    """Signed download link for ``path``, or None after alerting why not."""
    try:
        url = functions_client.request_signed_url(path)
    except ConfigurationError as e:
        dialogs.alert(e.message)
        return None
    except NetworkError as e:
        log.error("Signed URL request failed: %s", e)
        dialogs.alert("Signed URL request failed")
        return None
    if not url:
        dialogs.alert("Could not get signed URL")
        return None
    return url
