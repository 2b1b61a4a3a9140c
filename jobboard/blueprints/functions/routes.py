# jobboard/blueprints/functions/routes.py
"""Stateless JSON handlers for the two privileged operations."""
from flask import request, jsonify, current_app, Response

from ...config import require_settings
from ...errors import JobBoardError
from ...extensions import csrf
from ...services import storage_service
from ...services.email_service import send_application_email
from . import functions_bp

# Every method reaches the view so non-POST gets the plain-text 405
_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
DEFAULT_EXPIRES = 60


def _method_not_allowed():
    return Response("Only POST allowed", status=405, mimetype="text/plain")

def _error(err: JobBoardError, status: int = 500):
    return jsonify(err.to_dict()), status

def _missing(value) -> bool:
    return value is None or value in ("", 0)


@functions_bp.route("/get-signed-url", methods=_ALL_METHODS)
@csrf.exempt
def get_signed_url():
    if request.method != "POST":
        return _method_not_allowed()
    try:
        cfg = current_app.config
        require_settings(cfg, "signed_url")

        body = request.get_json(silent=True) or {}
        path = body.get("path") if isinstance(body, dict) else None
        expires = body.get("expires") if isinstance(body, dict) else None
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            expires = DEFAULT_EXPIRES

        if not path:
            return jsonify({"error": "path is required in body"}), 400

        signed = storage_service.create_signed_url(
            str(path),
            int(expires),
            bucket=cfg["STORAGE_BUCKET"],
            service_key=cfg["STORAGE_SERVICE_KEY"],
            base_url=cfg["STORAGE_URL"],
        )
        return jsonify({"signedUrl": signed})
    except JobBoardError as e:
        current_app.logger.warning("get-signed-url failed (%s): %s", e.kind.value, e.message)
        return _error(e)
    except Exception as e:
        current_app.logger.exception("get-signed-url crashed")
        return jsonify({"error": str(e)}), 500


@functions_bp.route("/send-application-email", methods=_ALL_METHODS)
@csrf.exempt
def send_application_email_handler():
    if request.method != "POST":
        return _method_not_allowed()
    try:
        require_settings(current_app.config, "notification")

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or _missing(payload.get("application")) or _missing(payload.get("job")):
            return jsonify({"error": "application and job required in body"}), 400

        send_application_email(payload["application"], payload["job"])
        return jsonify({"ok": True})
    except JobBoardError as e:
        current_app.logger.warning("send-application-email failed (%s): %s", e.kind.value, e.message)
        return _error(e)
    except Exception as e:
        current_app.logger.exception("send-application-email crashed")
        return jsonify({"error": str(e)}), 500
