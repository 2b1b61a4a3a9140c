from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_wtf import CSRFProtect
from flask_mail import Mail
from flask_babel import Babel, gettext as _, lazy_gettext as _l


db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()
mail = Mail()
babel = Babel()
