from flask import render_template, request, current_app
from werkzeug.exceptions import HTTPException
from flask_wtf.csrf import CSRFError
from ...extensions import db
from . import errors_bp

# 404: unknown paths fall back to the job listing
@errors_bp.app_errorhandler(404)
def err_404(e):
    if request.url_rule is None and request.method == "GET":
        from ..main.careers import jobs_list
        return jobs_list()
    return render_template("errors/404.html", path=request.path), 404

# CSRF, typically treated as 400 Bad Request
@errors_bp.app_errorhandler(CSRFError)
def err_csrf(e):
    # e.description is human-readable
    return render_template("errors/400_csrf.html", error=e), 400

# 500 Internal Server Error
@errors_bp.app_errorhandler(500)
def err_500(e):
    # if a DB action caused this, rollback so app isn’t stuck in bad transaction
    db.session.rollback()
    return render_template("errors/500.html"), 500

# Fallback for uncaught HTTPException (405, 413, ...)
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    return render_template("errors/http_generic.html", code=e.code, name=e.name, description=e.description), e.code

# Last-resort: any other Exception
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    db.session.rollback()
    current_app.logger.exception("Unhandled error on %s", request.path)
    # Don’t leak internals, just show generic 500
    return render_template("errors/500.html"), 500