from flask import Blueprint

main_bp = Blueprint("main", __name__)

# Import route modules to register their endpoints
from . import careers  # noqa: E402,F401
