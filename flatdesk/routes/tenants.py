# flatdesk/routes/tenants.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import desc

from flatdesk.errors import ApiError, validation_error
from flatdesk.extensions import db
from flatdesk.models import Tenant
from flatdesk.security import current_user_id, require_owner
from flatdesk.services import tenancy
from flatdesk.utils.parsing import json_body

bp = Blueprint("tenants", __name__)

# Records are created when a tenant moves into a flat, so there is no POST here.
UPDATABLE_FIELDS = tenancy.RECORD_FIELDS


def _owned_tenant(tenant_id):
    t = db.session.get(Tenant, tenant_id)
    if t is None:
        raise ApiError(404, "Tenant not found")
    return require_owner(t)


@bp.get("")
@jwt_required()
def list_tenants():
    items = (Tenant.query
             .filter_by(user_id=current_user_id())
             .order_by(desc(Tenant.created_at), desc(Tenant.id))
             .all())
    return jsonify([t.serialize() for t in items]), 200


@bp.get("/flat/<int:flat_id>")
@jwt_required()
def tenants_by_flat(flat_id):
    items = (Tenant.query
             .filter_by(flat_id=flat_id, user_id=current_user_id())
             .order_by(desc(Tenant.created_at), desc(Tenant.id))
             .all())
    return jsonify([t.serialize(include_flat=False) for t in items]), 200


@bp.get("/<int:tenant_id>")
@jwt_required()
def get_tenant(tenant_id):
    return jsonify(_owned_tenant(tenant_id).serialize()), 200


@bp.put("/<int:tenant_id>")
@jwt_required()
def update_tenant(tenant_id):
    t = _owned_tenant(tenant_id)
    data = json_body()
    try:
        fields = tenancy.parse_tenant_fields(data, UPDATABLE_FIELDS)
    except ValueError as e:
        return validation_error(str(e))
    if "name" in fields and not fields["name"]:
        return validation_error("Tenant name is required")
    contact = data.get("emergency_contact")
    if contact is not None and not isinstance(contact, dict):
        return validation_error("emergency_contact is not valid")

    # only the occupant's record drives the flat snapshot
    was_occupant = tenancy.is_occupant(t)
    for key, value in fields.items():
        setattr(t, key, value)
    if "emergency_contact" in data:
        t.emergency_contact = data["emergency_contact"]

    if was_occupant and t.is_current:
        tenancy.sync_snapshot_from_record(t)
    elif was_occupant:
        # moving the occupant out through the record empties the flat
        t.flat.clear_tenant_details()
        t.flat.vacant = True

    db.session.commit()
    return jsonify(t.serialize()), 200


@bp.delete("/<int:tenant_id>")
@jwt_required()
def delete_tenant(tenant_id):
    t = _owned_tenant(tenant_id)
    flat = t.flat
    if tenancy.is_occupant(t):
        flat.clear_tenant_details()
        flat.vacant = True

    db.session.delete(t)
    db.session.commit()
    return jsonify({"message": "Tenant deleted successfully"}), 200
