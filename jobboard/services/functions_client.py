# jobboard/services/functions_client.py
"""Calls from the views to the privileged handlers at FUNCTION_BASE."""
from __future__ import annotations
import requests
from flask import current_app
from typing import Optional
import logging

from ..errors import ConfigurationError, NetworkError

log = logging.getLogger(__name__)

def _function_url(name: str) -> Optional[str]:
    base = (current_app.config.get("FUNCTION_BASE") or "").strip()
    if not base:
        return None
    return f"{base.rstrip('/')}/{name}"

def _post(url: str, payload: dict) -> requests.Response:
    try:
        return requests.post(
            url,
            json=payload,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=current_app.config.get("FUNCTION_TIMEOUT"),
        )
    except requests.RequestException as e:
        log.warning("POST %s failed: %s", url, e)
        raise NetworkError(str(e)) from e

def request_signed_url(path: str, expires: int | None = None) -> Optional[str]:
    """Ask the signed-URL handler for a download link; None when it returns none."""
    url = _function_url("get-signed-url")
    if not url:
        raise ConfigurationError("No function base configured (FUNCTION_BASE).")
    if expires is None:
        expires = current_app.config.get("SIGNED_URL_EXPIRES", 120)

    r = _post(url, {"path": path, "expires": expires})
    try:
        data = r.json()
    except ValueError:
        data = None
    if r.status_code >= 400:
        log.error("get-signed-url status=%s body=%s", r.status_code, r.text[:500])
    return (data or {}).get("signedUrl") if isinstance(data, dict) else None

def notify_application(application: dict, job: dict) -> bool:
    """Fire the notification handler. Returns False when skipped or rejected."""
    url = _function_url("send-application-email")
    if not url:
        log.info("FUNCTION_BASE not set; skipping application email for %s", application.get("id"))
        return False
    r = _post(url, {"application": application, "job": job})
    log.info("send-application-email status=%s", r.status_code)
    if r.status_code >= 400:
        log.warning("send-application-email rejected: %s", r.text[:500])
        return False
    return True
