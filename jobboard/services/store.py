# jobboard/services/store.py
"""Read/write operations against the jobs, job_types and applications tables.

Every function either returns plain model objects or raises ``StoreError``
with the database's message; the session is rolled back before raising.
"""
from __future__ import annotations
import logging
from functools import wraps
from typing import Optional

from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..extensions import db
from ..errors import StoreError
from ..models.careers import Job, JobType, Application, CARD_FIELDS

log = logging.getLogger(__name__)


def _store_op(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            msg = str(getattr(e, "orig", None) or e)
            log.warning("%s failed: %s", fn.__name__, msg)
            raise StoreError(msg) from e
    return wrapper


# ---- Jobs ----

@_store_op
def list_active_jobs() -> list:
    cols = [getattr(Job, name) for name in CARD_FIELDS]
    stmt = select(*cols).where(Job.status == "active").order_by(desc(Job.created_at), desc(Job.id))
    return [dict(row) for row in db.session.execute(stmt).mappings()]

@_store_op
def get_job_by_slug(slug: str) -> Optional[Job]:
    return db.session.execute(select(Job).where(Job.slug == slug)).scalar_one_or_none()

@_store_op
def get_job(job_id: int) -> Optional[Job]:
    return db.session.get(Job, job_id)

@_store_op
def list_jobs() -> list[Job]:
    return list(db.session.scalars(select(Job).order_by(desc(Job.created_at), desc(Job.id))))

@_store_op
def save_job(job: Job) -> Job:
    db.session.add(job)
    db.session.commit()
    return job

@_store_op
def delete_job(job_id: int) -> None:
    job = db.session.get(Job, job_id)
    if job is None:
        raise StoreError("Job not found")
    # applications outlive their job posting
    Application.query.filter_by(job_id=job.id).update({"job_id": None})
    db.session.delete(job)
    db.session.commit()


# ---- Job types ----

@_store_op
def list_job_types() -> list[JobType]:
    return list(db.session.scalars(select(JobType).order_by(desc(JobType.created_at), desc(JobType.id))))

@_store_op
def create_job_type(name: str) -> JobType:
    jt = JobType(name=name)
    db.session.add(jt)
    db.session.commit()
    return jt

@_store_op
def delete_job_type(type_id: int) -> None:
    jt = db.session.get(JobType, type_id)
    if jt is None:
        raise StoreError("Job type not found")
    # SET NULL, never cascade (sqlite ignores the FK clause unless enforced)
    Job.query.filter_by(job_type_id=jt.id).update({"job_type_id": None})
    db.session.delete(jt)
    db.session.commit()


# ---- Applications ----

@_store_op
def list_applications() -> list[Application]:
    return list(db.session.scalars(
        select(Application).order_by(desc(Application.created_at), desc(Application.id))
    ))

def _application_by_token(token: str) -> Optional[Application]:
    return db.session.execute(
        select(Application).where(Application.submission_token == token)
    ).scalar_one_or_none()

@_store_op
def find_application_by_token(token: str) -> Optional[Application]:
    if not token:
        return None
    return _application_by_token(token)

@_store_op
def insert_application(**fields) -> tuple[Application, bool]:
    """Insert and return ``(application, created)``.

    A concurrent submit that already stored the same ``submission_token``
    wins: its row comes back with ``created=False``.
    """
    app = Application(**fields)
    db.session.add(app)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        token = fields.get("submission_token")
        existing = _application_by_token(token) if token else None
        if existing is None:
            raise
        log.info("Application for token %s already stored as %s", token, existing.id)
        return existing, False
    log.info("Application %s stored for job_id=%s", app.id, app.job_id)
    return app, True

@_store_op
def delete_application(app_id: int) -> None:
    app = db.session.get(Application, app_id)
    if app is None:
        raise StoreError("Application not found")
    db.session.delete(app)
    db.session.commit()
