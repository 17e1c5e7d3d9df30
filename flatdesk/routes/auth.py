# flatdesk/routes/auth.py
from flask import Blueprint, jsonify
from flask_jwt_extended import create_access_token, jwt_required

from flatdesk.errors import ApiError, validation_error
from flatdesk.extensions import db
from flatdesk.models import User
from flatdesk.security import current_user_id
from flatdesk.utils.parsing import is_blank, json_body

bp = Blueprint("auth", __name__)


def _token_for(user):
    return create_access_token(identity=str(user.id), additional_claims={"email": user.email})


def _normalize_email(value):
    return (value or "").strip().lower()


def _non_text_field(data, fields=("name", "email", "password", "address")):
    """Message for the first field that is present but not a string, else None."""
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            return f"{field.capitalize()} must be a string"
    return None


@bp.post("/register")
def register():
    data = json_body()
    error = _non_text_field(data)
    if error:
        return validation_error(error)
    for field in ("name", "email", "password"):
        if is_blank(data.get(field)):
            return validation_error(f"{field.capitalize()} is required")

    email = _normalize_email(data["email"])
    if User.query.filter_by(email=email).first():
        return validation_error("User already exists")

    user = User(name=data["name"].strip(), email=email, address=data.get("address"))
    user.set_password(data["password"])
    db.session.add(user)
    db.session.commit()
    return jsonify(user=user.serialize(), token=_token_for(user)), 201


@bp.post("/login")
def login():
    data = json_body()
    error = _non_text_field(data, ("email", "password"))
    if error:
        return validation_error(error)
    email = _normalize_email(data.get("email"))
    password = data.get("password") or ""
    if not email or not password:
        return validation_error("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({"error": "unauthorized", "message": "Invalid email or password"}), 401

    return jsonify(user=user.serialize(), token=_token_for(user)), 200


def _current_user():
    user = db.session.get(User, current_user_id())
    if not user:
        raise ApiError(404, "User not found")
    return user


@bp.get("/profile")
@jwt_required()
def get_profile():
    return jsonify(_current_user().serialize()), 200


@bp.put("/profile")
@jwt_required()
def update_profile():
    user = _current_user()
    data = json_body()
    error = _non_text_field(data)
    if error:
        return validation_error(error)

    if not is_blank(data.get("email")):
        email = _normalize_email(data["email"])
        clash = User.query.filter(User.email == email, User.id != user.id).first()
        if clash:
            return validation_error("Email is already in use")
        user.email = email
    if not is_blank(data.get("name")):
        user.name = data["name"].strip()
    if "address" in data:
        user.address = data["address"]
    if not is_blank(data.get("password")):
        user.set_password(data["password"])

    db.session.commit()
    return jsonify(user.serialize()), 200
