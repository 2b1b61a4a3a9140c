from flask import render_template, request, redirect, url_for, flash, current_app, Response
from ...errors import JobBoardError
from ...extensions import _
from ...dialogs import FormDialogs
from ...security import admin_required, is_admin_unlocked, unlock_admin, lock_admin
from ...models.careers import Job, APPLICATION_STATUSES
from ...services import store, admin_service
from ...services.applications import filter_applications, normalize_status_filter, export_applications
from .forms import JobForm

from . import admin_bp


def _dialog_or_redirect(dialogs: FormDialogs):
    if dialogs.pending:
        kind, message = dialogs.pending
        return render_template("admin/dialog.html", kind=kind, message=message, action=request.path)
    return redirect(url_for("admin.dashboard"))

def _filters():
    return (request.args.get("q") or "").strip(), normalize_status_filter(request.args.get("status"))


# ---- Gate ----

@admin_bp.route("", methods=["GET"])
def dashboard():
    if not is_admin_unlocked():
        return render_template("admin/gate.html", prompt=admin_service.SECRET_PROMPT)

    # every row is rendered; search/status filtering happens in the browser
    q, status = _filters()
    try:
        data = admin_service.load_dashboard()
    except JobBoardError as e:
        current_app.logger.error("Admin dashboard load failed: %s", e.message)
        flash(e.message, "danger")
        data = admin_service.DashboardData()
    return render_template(
        "admin/dashboard.html",
        data=data,
        apps=data.applications,
        q=q,
        status=status,
        statuses=APPLICATION_STATUSES,
    )

@admin_bp.route("/unlock", methods=["POST"])
def unlock():
    dialogs = FormDialogs(request.form)
    if admin_service.authorize(dialogs, current_app.config.get("ADMIN_SECRET") or ""):
        unlock_admin()
        current_app.logger.info("Admin dashboard unlocked from %s", request.remote_addr)
        return redirect(url_for("admin.dashboard"))
    return render_template("admin/gate.html", prompt=admin_service.SECRET_PROMPT)

@admin_bp.route("/lock", methods=["GET", "POST"])
def lock():
    lock_admin()
    return redirect(url_for("admin.dashboard"))


# ---- Jobs ----

def _job_form_page(job=None):
    try:
        job_types = store.list_job_types()
    except JobBoardError as e:
        flash(e.message, "danger")
        job_types = []
    form = JobForm(job=job, job_types=job_types)
    if form.validate_on_submit():
        target = form.populate_job(job or Job())
        try:
            store.save_job(target)
        except JobBoardError as e:
            flash(_("Save failed: %(msg)s", msg=e.message), "danger")
            return render_template("admin/job_edit.html", form=form, job=job), 500
        flash(_("Job saved."), "success")
        return redirect(url_for("admin.dashboard"))
    return render_template("admin/job_edit.html", form=form, job=job)

@admin_bp.route("/jobs/new", methods=["GET", "POST"])
@admin_required
def job_new():
    return _job_form_page()

@admin_bp.route("/jobs/<int:jid>/edit", methods=["GET", "POST"])
@admin_required
def job_edit(jid):
    try:
        job = store.get_job(jid)
    except JobBoardError as e:
        current_app.logger.error("Loading job %s failed: %s", jid, e.message)
        flash(e.message, "danger")
        return redirect(url_for("admin.dashboard"))
    if job is None:
        flash(_("Job not found"), "warning")
        return redirect(url_for("admin.dashboard"))
    return _job_form_page(job)

@admin_bp.route("/jobs/<int:jid>/delete", methods=["POST"])
@admin_required
def job_delete(jid):
    dialogs = FormDialogs(request.form)
    admin_service.delete_job(dialogs, jid)
    return _dialog_or_redirect(dialogs)


# ---- Job types ----

@admin_bp.route("/job-types/new", methods=["POST"])
@admin_required
def job_type_new():
    dialogs = FormDialogs(request.form)
    admin_service.create_job_type(dialogs)
    return _dialog_or_redirect(dialogs)

@admin_bp.route("/job-types/<int:tid>/delete", methods=["POST"])
@admin_required
def job_type_delete(tid):
    dialogs = FormDialogs(request.form)
    admin_service.delete_job_type(dialogs, tid)
    return _dialog_or_redirect(dialogs)


# ---- Applications ----

@admin_bp.route("/applications/<int:aid>/delete", methods=["POST"])
@admin_required
def application_delete(aid):
    dialogs = FormDialogs(request.form)
    admin_service.delete_application(dialogs, aid)
    return _dialog_or_redirect(dialogs)

@admin_bp.route("/applications/export")
@admin_required
def applications_export():
    q, status = _filters()
    try:
        apps = filter_applications(store.list_applications(), q, status)
    except JobBoardError as e:
        return {"error": e.message}, 500
    return Response(export_applications(apps), mimetype="application/json")

@admin_bp.route("/files/open")
@admin_required
def file_open():
    path = (request.args.get("path") or "").strip()
    dialogs = FormDialogs(request.form)
    url = admin_service.open_signed_url(dialogs, path) if path else None
    if not path:
        dialogs.alert(_("Could not get signed URL"))
    if not url:
        return redirect(url_for("admin.dashboard"))
    return redirect(url)
