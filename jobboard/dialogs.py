# jobboard/dialogs.py
"""Prompt / confirm / alert capabilities used by the admin workflows.

Services receive a ``Dialogs`` object instead of talking to the UI, so the
same workflow runs against the web dialog page or a scripted test double.
"""
from typing import Optional

from flask import flash


class Dialogs:
    def request(self, message: str) -> Optional[str]:
        """Ask for a value. None means cancelled."""
        raise NotImplementedError

    def confirm(self, message: str) -> bool:
        raise NotImplementedError

    def alert(self, message: str) -> None:
        raise NotImplementedError


class FormDialogs(Dialogs):
    """Answers come from the re-submitted dialog form (``confirm`` / ``value``).

    When a question has not been answered yet, ``pending`` holds
    ``(kind, message)`` so the view can render the dialog page.
    """

    def __init__(self, form):
        self.form = form
        self.pending = None

    def request(self, message):
        if "cancel" in self.form:
            return None
        if "value" not in self.form:
            self.pending = ("request", message)
            return None
        value = (self.form.get("value") or "").strip()
        return value or None

    def confirm(self, message):
        if self.form.get("confirm") == "yes":
            return True
        if "cancel" not in self.form:
            self.pending = ("confirm", message)
        return False

    def alert(self, message):
        flash(message, "warning")
