# jobboard/blueprints/storage.py
import mimetypes
from flask import Blueprint, abort, current_app, send_file
from ..errors import StoreError
from ..services.storage_service import resolve_signed_token, open_object

storage_bp = Blueprint("storage", __name__, url_prefix="/storage")

@storage_bp.get("/object/<token>")
def signed_object(token):
    key = current_app.config.get("STORAGE_SERVICE_KEY")
    if not key:
        abort(404)
    try:
        bucket, path = resolve_signed_token(token, service_key=key)
        abs_path = open_object(bucket, path)
    except StoreError as e:
        current_app.logger.info("Signed object refused: %s", e.message)
        abort(403 if e.message != "Object not found" else 404)

    mime = mimetypes.guess_type(abs_path.name)[0] or "application/octet-stream"
    inline_types = ("image/", "text/", "application/pdf")
    resp = send_file(
        abs_path,
        mimetype=mime,
        as_attachment=not mime.startswith(inline_types),
        download_name=abs_path.name,
        conditional=True,
        max_age=0,
    )
    resp.headers["Cache-Control"] = "private, no-store"
    return resp
