# flatdesk/security.py
from flask_jwt_extended import get_jwt_identity

from .errors import ApiError
from .extensions import db
from .models import Flat


def current_user_id():
    """Id of the authenticated user; call inside a @jwt_required() view."""
    ident = get_jwt_identity()
    try:
        return int(ident)
    except (TypeError, ValueError):
        raise ApiError(401, 'Invalid token identity')


def require_owner(resource, user_id=None):
    """Raise 403 unless ``resource.user_id`` belongs to the requester."""
    user_id = current_user_id() if user_id is None else user_id
    if str(resource.user_id) != str(user_id):
        raise ApiError(403, 'Not authorized')
    return resource


def load_owned_flat(flat_id, user_id=None):
    """Fetch a flat and check that the requester owns it (404, then 403)."""
    flat = db.session.get(Flat, flat_id)
    if flat is None:
        raise ApiError(404, 'Flat not found')
    return require_owner(flat, user_id)
