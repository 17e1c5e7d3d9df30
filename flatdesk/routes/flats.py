# flatdesk/routes/flats.py
import logging

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import desc

from flatdesk.errors import ApiError, validation_error
from flatdesk.extensions import db
from flatdesk.models import Flat
from flatdesk.security import current_user_id, load_owned_flat
from flatdesk.services import tenancy
from flatdesk.services.uploads import FLAT_IMAGES, MAINTENANCE_IMAGES, delete_images, save_images
from flatdesk.utils.dates import parse_datetime
from flatdesk.utils.parsing import is_blank, json_body, parse_bool, parse_int, request_data

logger = logging.getLogger(__name__)

bp = Blueprint("flats", __name__)

# field -> message when it is missing on create
REQUIRED_FIELDS = (
    ("title", "Title is required"),
    ("address", "Address is required"),
    ("bedrooms", "Number of bedrooms is required"),
    ("bathrooms", "Number of bathrooms is required"),
    ("carpark", "Carpark information is required"),
)


def _uploaded_images():
    files = request.files.getlist("images")
    return save_images(files, FLAT_IMAGES, current_app.config["MAX_FLAT_IMAGES"])


def _parse_flat_fields(data):
    """Convert the typed listing fields present in ``data``.

    Returns (fields, error message).
    """
    fields = {}
    for key in ("title", "description", "address"):
        if not is_blank(data.get(key)):
            fields[key] = data[key].strip() if isinstance(data[key], str) else data[key]
    for key, label in (("bedrooms", "bedrooms"), ("bathrooms", "bathrooms")):
        if not is_blank(data.get(key)):
            try:
                fields[key] = parse_int(data[key])
            except ValueError:
                return None, f"Number of {label} must be a number"
            if fields[key] < 0:
                return None, f"Number of {label} cannot be negative"
    for key in ("carpark", "vacant"):
        if not is_blank(data.get(key)):
            fields[key] = parse_bool(data[key])
    if not is_blank(data.get("inspection_date")):
        try:
            fields["inspection_date"] = parse_datetime(data["inspection_date"])
        except ValueError:
            return None, "Inspection date must be a valid date"
    return fields, None


# ---------------------------------------------------------------------------
# Flats
# ---------------------------------------------------------------------------

@bp.get("")
@jwt_required()
def list_flats():
    flats = Flat.query.filter_by(user_id=current_user_id()).order_by(Flat.id).all()
    return jsonify([f.serialize() for f in flats]), 200


@bp.post("")
@jwt_required()
def create_flat():
    data = request_data()
    for field, message in REQUIRED_FIELDS:
        if is_blank(data.get(field)):
            return validation_error(message)

    fields, error = _parse_flat_fields(data)
    if error:
        return validation_error(error)
    fields.pop("vacant", None)

    images = _uploaded_images()
    flat = Flat(user_id=current_user_id(), images=images, vacant=True, **fields)
    db.session.add(flat)
    db.session.commit()
    logger.info("Flat %s created by user %s with %d image(s)", flat.id, flat.user_id, len(images))
    return jsonify(flat.serialize()), 201


@bp.put("/<int:flat_id>")
@jwt_required()
def update_flat(flat_id):
    flat = load_owned_flat(flat_id)
    fields, error = _parse_flat_fields(request_data())
    if error:
        return validation_error(error)

    # empty values leave the stored ones alone
    for key, value in fields.items():
        setattr(flat, key, value)

    new_images = _uploaded_images()
    if new_images:
        flat.images = list(flat.images or []) + new_images

    db.session.commit()
    logger.info("Flat %s updated", flat.id)
    return jsonify(flat.serialize()), 200


@bp.delete("/<int:flat_id>")
@jwt_required()
def delete_flat(flat_id):
    flat = load_owned_flat(flat_id)
    flat_images = list(flat.images or [])
    report_images = [img for r in flat.maintenance_reports for img in (r.images or [])]

    db.session.delete(flat)
    db.session.commit()

    delete_images(flat_images, FLAT_IMAGES)
    delete_images(report_images, MAINTENANCE_IMAGES)
    logger.info("Flat %s deleted", flat_id)
    return jsonify({"message": "Flat deleted"}), 200


@bp.delete("/<int:flat_id>/images/<image_name>")
@jwt_required()
def delete_flat_image(flat_id, image_name):
    flat = load_owned_flat(flat_id)
    images = list(flat.images or [])
    if image_name not in images:
        raise ApiError(404, "Image not found")

    flat.images = [img for img in images if img != image_name]
    db.session.commit()
    delete_images([image_name], FLAT_IMAGES)
    return jsonify({"message": "Image deleted successfully", "flat": flat.serialize()}), 200


@bp.get("/public/all")
def public_flats():
    """Every listing, newest first, with the owner's name and email only."""
    flats = Flat.query.order_by(desc(Flat.created_at), desc(Flat.id)).all()
    items = []
    for f in flats:
        item = f.serialize(include_records=False, include_tenant=False)
        item["owner"] = {"name": f.owner.name, "email": f.owner.email} if f.owner else None
        items.append(item)
    return jsonify(items), 200


# ---------------------------------------------------------------------------
# Current tenant of a flat
# ---------------------------------------------------------------------------

def _tenant_payload(flat):
    return {"flat_id": flat.id, "flat_title": flat.title, "tenant": flat.tenant_details}


@bp.post("/<int:flat_id>/tenant")
@jwt_required()
def add_tenant(flat_id):
    data = json_body()
    error = tenancy.validate_name(data)
    if error:
        return validation_error(error)

    flat = load_owned_flat(flat_id)
    if flat.has_tenant:
        return validation_error("Flat already has a tenant")

    try:
        fields = tenancy.parse_tenant_fields(
            data, tenancy.SHARED_FIELDS + ("deposit_amount", "notes"))
    except ValueError as e:
        return validation_error(str(e))

    record = tenancy.move_in(flat, fields, data.get("emergency_contact"))
    db.session.commit()
    logger.info("Tenant %s moved into flat %s", record.id, flat.id)
    return jsonify({
        "message": "Tenant added successfully",
        "tenant": flat.tenant_details,
        "tenant_record": record.serialize(include_flat=False),
        "flat": flat.serialize(),
    }), 201


@bp.get("/<int:flat_id>/tenant")
@jwt_required()
def get_tenant(flat_id):
    flat = load_owned_flat(flat_id)
    if not flat.has_tenant:
        raise ApiError(404, "No tenant found for this flat")
    return jsonify(_tenant_payload(flat)), 200


@bp.put("/<int:flat_id>/tenant")
@jwt_required()
def update_tenant(flat_id):
    flat = load_owned_flat(flat_id)
    if not flat.has_tenant:
        raise ApiError(404, "No tenant found for this flat to update")

    data = json_body()
    try:
        fields = tenancy.parse_tenant_fields(data)
    except ValueError as e:
        return validation_error(str(e))
    if fields.get("name") is None:
        fields.pop("name", None)

    tenancy.update_snapshot(flat, fields)
    db.session.commit()
    return jsonify({
        "message": "Tenant updated successfully",
        "tenant": flat.tenant_details,
        "flat": flat.serialize(),
    }), 200


@bp.delete("/<int:flat_id>/tenant")
@jwt_required()
def remove_tenant(flat_id):
    flat = load_owned_flat(flat_id)
    if not flat.has_tenant:
        raise ApiError(404, "No tenant found for this flat")

    tenancy.move_out(flat)
    db.session.commit()
    return jsonify({"message": "Tenant removed successfully", "flat": flat.serialize()}), 200


@bp.get("/tenants/all")
@jwt_required()
def all_tenants():
    flats = (Flat.query
             .filter(Flat.user_id == current_user_id(), Flat.tenant_name.isnot(None))
             .order_by(Flat.id)
             .all())
    tenants = [{**flat.tenant_details, "flat_id": flat.id, "flat_title": flat.title}
               for flat in flats if flat.has_tenant]
    return jsonify({
        "message": "Tenants retrieved successfully",
        "count": len(tenants),
        "tenants": tenants,
    }), 200
