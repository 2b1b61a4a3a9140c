import uuid

from flask import render_template, redirect, url_for, flash, current_app

from ...errors import JobBoardError, ValidationError
from ...extensions import _
from ...services import store
from ...services.applications import submit_application, SUCCESS_MESSAGE
from .forms import ApplicationForm

from . import main_bp

@main_bp.route("/")
def jobs_list():
    jobs, error = [], None
    try:
        jobs = store.list_active_jobs()
    except JobBoardError as e:
        error = e.message
    return render_template("careers/list.html", jobs=jobs, error=error)

def _fresh_form() -> ApplicationForm:
    form = ApplicationForm(formdata=None)
    form.submission_token.data = uuid.uuid4().hex
    return form

@main_bp.route("/jobs/<slug>", methods=["GET", "POST"])
def job_detail(slug):
    try:
        job = store.get_job_by_slug(slug)
    except JobBoardError as e:
        return render_template("careers/detail.html", job=None, msg=e.message), 500
    if job is None:
        return render_template("careers/detail.html", job=None, msg=_("Job not found")), 404

    form = ApplicationForm()
    if not form.is_submitted():
        return render_template("careers/detail.html", job=job, form=_fresh_form(), msg=None)

    if not form.validate():
        # CSRF or length problems; keep what the candidate typed
        return render_template("careers/detail.html", job=job, form=form,
                               msg=_("Please check the highlighted fields.")), 400

    try:
        submit_application(job, form.to_submission())
    except ValidationError as e:
        return render_template("careers/detail.html", job=job, form=form, msg=e.message), 400
    except JobBoardError as e:
        current_app.logger.warning("Application for %s failed: %s", job.slug, e.message)
        return render_template("careers/detail.html", job=job, form=form,
                               msg=e.message or _("Submission failed")), 500

    flash(_(SUCCESS_MESSAGE), "success")
    return redirect(url_for("main.job_detail", slug=job.slug))
