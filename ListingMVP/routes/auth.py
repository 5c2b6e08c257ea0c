from flask import Blueprint, current_app, jsonify, request, session
from flask_login import current_user, login_user, logout_user
from werkzeug.security import generate_password_hash

from ListingMVP.exceptions import AuthRequiredError
from ListingMVP.models import Credentials, parse_payload
from ListingMVP.utils.decorators import agent_required

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _start_session(user):
    # ✅ Make sessions stick
    session.permanent = True
    login_user(user, remember=True)


# ------------------------------------------------
# 🟦 Register
# ------------------------------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    creds = parse_payload(Credentials, request.get_json(silent=True))

    user = current_app.store.create_user({
        "username": creds.username,
        "password": generate_password_hash(creds.password),
    })

    _start_session(user)
    return jsonify(user.to_dict()), 201


# ------------------------------------------------
# 🟩 Login
# ------------------------------------------------
@auth_bp.route("/login", methods=["POST"])
def login():
    creds = parse_payload(Credentials, request.get_json(silent=True))

    user = current_app.store.get_user_by_username(creds.username)
    if not user or not user.check_password(creds.password):
        raise AuthRequiredError("Invalid username or password")

    _start_session(user)
    current_app.logger.info("User %s logged in", user.username)
    return jsonify(user.to_dict())


# ------------------------------------------------
# 🟥 Logout
# ------------------------------------------------
@auth_bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    return jsonify({"status": "logged_out"})


# ------------------------------------------------
# 👤 Current user
# ------------------------------------------------
@auth_bp.route("/user")
@agent_required
def me():
    return jsonify(current_user.to_dict())
