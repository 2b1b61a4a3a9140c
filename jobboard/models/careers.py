from jobboard.extensions import db
from datetime import datetime

JOB_STATUSES = ("active", "draft", "closed")
APPLICATION_STATUSES = ("submitted", "reviewing", "rejected", "accepted")
HOW_HEARD_CHOICES = (
    ("linkedin", "LinkedIn"),
    ("indeed", "Indeed"),
    ("company-website", "Company Website"),
    ("referral", "Referral"),
    ("job-board", "Job Board"),
    ("other", "Other"),
)

# Long-form sections in the order the detail page shows them
JOB_SECTIONS = (
    ("description", "Description"),
    ("overview", "Overview"),
    ("position_summary", "Position Summary"),
    ("responsibilities", "Responsibilities"),
    ("requirements", "Requirements"),
    ("qualifications", "Qualifications"),
    ("benefits", "Benefits"),
)

# Fields a listing card needs
CARD_FIELDS = ("id", "slug", "title", "short_description", "location", "salary")


def _iso(dt):
    return dt.isoformat() if dt else None


class JobType(db.Model):
    __tablename__ = "job_types"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "created_at": _iso(self.created_at)}


class Job(db.Model):
    __tablename__ = "jobs"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    short_description = db.Column(db.String(500), nullable=True)
    description = db.Column(db.Text, nullable=True)
    overview = db.Column(db.Text, nullable=True)
    position_summary = db.Column(db.Text, nullable=True)
    responsibilities = db.Column(db.Text, nullable=True)
    requirements = db.Column(db.Text, nullable=True)
    qualifications = db.Column(db.Text, nullable=True)
    benefits = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(120), nullable=True)            # e.g. "Nairobi · Hybrid"
    salary = db.Column(db.String(120), nullable=True)              # free-form label
    job_type_id = db.Column(db.Integer, db.ForeignKey("job_types.id", ondelete="SET NULL"), nullable=True)
    job_type = db.relationship("JobType", backref=db.backref("jobs", lazy="dynamic"))
    status = db.Column(db.String(20), default="active", nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def sections(self):
        """(label, lines) for every non-empty long-form section."""
        out = []
        for field, label in JOB_SECTIONS:
            text = getattr(self, field) or ""
            if text.strip():
                out.append((label, text.split("\n")))
        return out

    def to_dict(self):
        data = {c.name: getattr(self, c.name) for c in self.__table__.columns}
        data["created_at"] = _iso(self.created_at)
        return data


class Application(db.Model):
    __tablename__ = "applications"
    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True, index=True)
    job = db.relationship("Job", backref=db.backref("applications", lazy="dynamic"))
    full_name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone_number = db.Column(db.String(80), nullable=False)
    location = db.Column(db.String(120), nullable=False)
    how_heard = db.Column(db.String(40), nullable=False)
    why_interested = db.Column(db.Text, nullable=False)
    experience = db.Column(db.Text, nullable=False)
    resume_path = db.Column(db.String(500), nullable=False)
    cover_letter_path = db.Column(db.String(500), nullable=True)
    agree_data_sharing = db.Column(db.Boolean, default=False, nullable=False)
    # submitted|reviewing|rejected|accepted
    status = db.Column(db.String(20), default="submitted", nullable=False, index=True)
    # one per rendered form; a second POST of the same form is a no-op
    submission_token = db.Column(db.String(64), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    @property
    def position(self):
        return self.job.title if self.job else None

    def to_dict(self):
        data = {c.name: getattr(self, c.name) for c in self.__table__.columns}
        data.pop("submission_token", None)
        data["created_at"] = _iso(self.created_at)
        data["position"] = self.position
        return data
