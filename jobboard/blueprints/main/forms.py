# jobboard/blueprints/main/forms.py
from __future__ import annotations

from flask_wtf import FlaskForm
from flask_wtf.file import FileField
from wtforms import (
    StringField,
    TextAreaField,
    SelectField,
    BooleanField,
    HiddenField,
    SubmitField,
)
from wtforms.validators import Length

from ...extensions import _l
from ...models.careers import HOW_HEARD_CHOICES
from ...services.applications import Submission


# Required-ness is checked by validate_submission() so the page can show a
# single combined message; the form itself only carries CSRF and lengths.
class ApplicationForm(FlaskForm):
    full_name = StringField(_l("Full Name *"), validators=[Length(max=160)])
    email = StringField(_l("Email Address *"), validators=[Length(max=255)])
    phone_number = StringField(_l("Phone Number *"), validators=[Length(max=80)])
    location = StringField(_l("Location / City *"), validators=[Length(max=120)])
    how_heard = SelectField(
        _l("How did you hear about this job? *"),
        choices=[("", _l("Select an option"))] + list(HOW_HEARD_CHOICES),
        validate_choice=False,
        default="",
    )
    why_interested = TextAreaField(_l("Why are you interested in this job? *"))
    experience = TextAreaField(_l("Relevant Experience *"))
    resume = FileField(_l("Upload Resume (PDF/DOC) *"))
    cover_letter = FileField(_l("Upload Cover Letter (optional)"))
    agree_data_sharing = BooleanField(_l("I agree to share my data for recruitment purposes. *"))
    submission_token = HiddenField()
    submit = SubmitField(_l("Submit Application"))

    def to_submission(self) -> Submission:
        return Submission(
            full_name=self.full_name.data or "",
            email=self.email.data or "",
            phone_number=self.phone_number.data or "",
            location=self.location.data or "",
            how_heard=self.how_heard.data or "",
            why_interested=self.why_interested.data or "",
            experience=self.experience.data or "",
            resume=self.resume.data,
            cover_letter=self.cover_letter.data,
            agree_data_sharing=bool(self.agree_data_sharing.data),
            submission_token=self.submission_token.data or "",
        )
