# jobboard/security.py
"""Admin gate helpers.

The secret gate only hides the dashboard. It is not an access-control
boundary; the database must enforce its own policy for privileged writes.
"""
from functools import wraps
from flask import session, redirect, url_for

ADMIN_SESSION_KEY = "admin_unlocked"


def is_admin_unlocked() -> bool:
    return bool(session.get(ADMIN_SESSION_KEY))

def unlock_admin():
    session[ADMIN_SESSION_KEY] = True

def lock_admin():
    session.pop(ADMIN_SESSION_KEY, None)

def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin_unlocked():
            return redirect(url_for("admin.dashboard"))
        return view(*args, **kwargs)
    return wrapper
