from flask_cors import CORS
from flask_login import LoginManager
from flask_mail import Mail

cors = CORS()
login_manager = LoginManager()
mail = Mail()

__all__ = ["cors", "login_manager", "mail"]
