# jobboard/services/applications.py
"""Candidate submission workflow plus the admin-side filter/export helpers."""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from flask import current_app

from ..errors import StoreError, ValidationError
from ..models.careers import APPLICATION_STATUSES, HOW_HEARD_CHOICES
from . import store, storage_service, functions_client

log = logging.getLogger(__name__)

CONSENT_MESSAGE = "Please agree to share your data for recruitment purposes."
REQUIRED_MESSAGE = "Please fill in all required fields and upload your resume."
SUCCESS_MESSAGE = "Application submitted successfully. Thank you!"

REQUIRED_TEXT_FIELDS = (
    "full_name", "email", "phone_number", "location",
    "how_heard", "why_interested", "experience",
)
_HOW_HEARD = {value for value, _label in HOW_HEARD_CHOICES}


@dataclass
class Submission:
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    location: str = ""
    how_heard: str = ""
    why_interested: str = ""
    experience: str = ""
    resume: Any = None            # werkzeug FileStorage
    cover_letter: Any = None
    agree_data_sharing: bool = False
    submission_token: str = ""

    def record_fields(self) -> dict:
        return {name: (getattr(self, name) or "").strip() for name in REQUIRED_TEXT_FIELDS}


def _has_file(fs) -> bool:
    return bool(fs is not None and getattr(fs, "filename", None))

def validate_submission(sub: Submission) -> Optional[str]:
    """The message to show, or None when the submission may proceed."""
    if not sub.agree_data_sharing:
        return CONSENT_MESSAGE
    values = sub.record_fields()
    if any(not values[name] for name in REQUIRED_TEXT_FIELDS) or not _has_file(sub.resume):
        return REQUIRED_MESSAGE
    if values["how_heard"] not in _HOW_HEARD:
        return REQUIRED_MESSAGE
    return None

def submit_application(job, sub: Submission, *, notify=None):
    """
    Validate, upload attachments, insert the record, then notify (best effort).
    Raises ValidationError before any store call, StoreError from uploads/insert.
    """
    error = validate_submission(sub)
    if error:
        raise ValidationError(error)

    existing = store.find_application_by_token(sub.submission_token)
    if existing is not None:
        log.info("Duplicate submission %s ignored (application %s)", sub.submission_token, existing.id)
        return existing

    folder = f"applications/{job.slug}"
    resume_path = storage_service.upload_object(sub.resume, folder)
    cover_path = storage_service.upload_object(sub.cover_letter, folder) if _has_file(sub.cover_letter) else None

    app, created = store.insert_application(
        job_id=job.id,
        resume_path=resume_path,
        cover_letter_path=cover_path,
        agree_data_sharing=True,
        submission_token=sub.submission_token or None,
        **sub.record_fields(),
    )
    if not created:
        # a concurrent POST of the same form got there first; keep only its files
        for path in filter(None, (resume_path, cover_path)):
            try:
                storage_service.delete_object(current_app.config.get("STORAGE_BUCKET"), path)
            except StoreError as e:
                log.warning("Could not remove duplicate upload %s: %s", path, e.message)
        return app

    notify = notify or functions_client.notify_application
    try:
        notify(app.to_dict(), job.to_dict())
    except Exception as e:
        # never blocks or reverts the stored application
        log.warning("send-application-email call failed: %s", e)
    return app


# ---- Admin helpers ----

def _field(app, name):
    if isinstance(app, dict):
        return app.get(name)
    return getattr(app, name, None)

def filter_applications(apps: Iterable, search: str = "", status: str = "all") -> list:
    q = (search or "").strip().lower()
    status = (status or "all").strip()
    out = []
    for app in apps:
        matches_search = not q or any(
            q in (_field(app, name) or "").lower() for name in ("full_name", "email", "position")
        )
        matches_status = status == "all" or _field(app, "status") == status
        if matches_search and matches_status:
            out.append(app)
    return out

def normalize_status_filter(value: str | None) -> str:
    value = (value or "all").strip().lower()
    return value if value in APPLICATION_STATUSES else "all"

def export_applications(apps: Iterable) -> str:
    return json.dumps([app.to_dict() if hasattr(app, "to_dict") else app for app in apps])
