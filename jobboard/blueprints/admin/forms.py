# jobboard/blueprints/admin/forms.py
from __future__ import annotations
import re
from typing import Optional

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, SubmitField
from wtforms.validators import DataRequired, Length, Optional as Opt, ValidationError

from ...extensions import _l
from ...errors import JobBoardError
from ...models.careers import Job, JOB_STATUSES
from ...services import store

SLUG_RE = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug[:200]

def _opt_int(value) -> Optional[int]:
    if value in (None, "", "None"):
        return None
    return int(value)


class JobForm(FlaskForm):
    title = StringField(_l("Title"), validators=[DataRequired(), Length(max=200)])
    slug = StringField(_l("Slug"), validators=[Length(max=200)])
    short_description = StringField(_l("Short description"), validators=[Opt(), Length(max=500)])
    description = TextAreaField(_l("Description"))
    overview = TextAreaField(_l("Overview"))
    position_summary = TextAreaField(_l("Position Summary"))
    responsibilities = TextAreaField(_l("Responsibilities"))
    requirements = TextAreaField(_l("Requirements"))
    qualifications = TextAreaField(_l("Qualifications"))
    benefits = TextAreaField(_l("Benefits"))
    location = StringField(_l("Location"), validators=[Opt(), Length(max=120)])
    salary = StringField(_l("Salary"), validators=[Opt(), Length(max=120)])
    job_type_id = SelectField(_l("Job type"), coerce=_opt_int, default=None)
    status = SelectField(_l("Status"), choices=[(s, s) for s in JOB_STATUSES], default="active")
    submit = SubmitField(_l("Save job"))

    def __init__(self, *args, job: Job | None = None, job_types=(), **kwargs):
        super().__init__(*args, obj=job, **kwargs)
        self.job = job
        self.job_type_id.choices = [("", _l("(none)"))] + [(t.id, t.name) for t in job_types]

    def validate_slug(self, field):  # type: ignore[override]
        slug = (field.data or "").strip() or slugify(self.title.data)
        if not re.match(SLUG_RE, slug):
            raise ValidationError("Use lowercase letters, numbers and dashes.")
        try:
            clash = store.get_job_by_slug(slug)
        except JobBoardError as e:
            raise ValidationError(e.message) from e
        if clash is not None and (self.job is None or clash.id != self.job.id):
            raise ValidationError("Another job already uses this slug.")

    def populate_job(self, job: Job) -> Job:
        for name in ("title", "short_description", "description", "overview", "position_summary",
                     "responsibilities", "requirements", "qualifications", "benefits", "location", "salary"):
            value = (getattr(self, name).data or "").strip()
            setattr(job, name, value or None)
        job.slug = (self.slug.data or "").strip() or slugify(self.title.data)
        job.job_type_id = self.job_type_id.data
        job.status = self.status.data
        return job
