# flatdesk/routes/maintenance.py
from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import jwt_required

from flatdesk.errors import ApiError, validation_error
from flatdesk.extensions import db
from flatdesk.models import (
    Flat, MaintenanceReport, ISSUE_TYPES, MAINTENANCE_STATUSES, PRIORITIES,
)
from flatdesk.security import current_user_id, load_owned_flat
from flatdesk.services.contractors import get_contractor, list_contractors
from flatdesk.services.events import emit
from flatdesk.services.uploads import MAINTENANCE_IMAGES, delete_images, save_images
from flatdesk.utils.dates import parse_datetime, utcnow
from flatdesk.utils.parsing import is_blank, json_body, parse_amount, request_data

bp = Blueprint("maintenance", __name__)


def _validate_report(data):
    if is_blank(data.get("issue_type")):
        return "Issue type is required"
    if is_blank(data.get("description")):
        return "Description is required"
    if is_blank(data.get("priority")):
        return "Priority is required"
    if is_blank(data.get("contractor_id")):
        return "Contractor selection is required"
    if data["issue_type"] not in ISSUE_TYPES:
        return "Issue type must be one of: " + ", ".join(ISSUE_TYPES)
    if data["priority"] not in PRIORITIES:
        return "Priority must be one of: " + ", ".join(PRIORITIES)
    return None


def _find_report(flat, report_id):
    if not flat.maintenance_reports:
        raise ApiError(404, "No maintenance reports found for this flat")
    report = next((r for r in flat.maintenance_reports if r.id == report_id), None)
    if report is None:
        raise ApiError(404, "Maintenance report not found")
    return report


def _with_contractor(report, **extra):
    return {**report.serialize(), **extra, "contractor_details": get_contractor(report.contractor_id)}


def _newest_first(reports):
    return sorted(reports, key=lambda r: (r["reported_date"] or "", r["id"]), reverse=True)


@bp.get("/contractors/list")
@jwt_required()
def contractors():
    return jsonify({
        "message": "Contractors retrieved successfully",
        "contractors": list_contractors(),
    }), 200


@bp.post("/<int:flat_id>/maintenance")
@jwt_required()
def report_maintenance(flat_id):
    """Log a maintenance issue against a flat and assign a contractor"""
    data = request_data()
    error = _validate_report(data)
    if error:
        return validation_error(error)

    flat = load_owned_flat(flat_id)

    contractor = get_contractor(data["contractor_id"])
    if not contractor:
        return validation_error("Invalid contractor selected")

    try:
        estimated_cost = parse_amount(data.get("estimated_cost"))
        scheduled_date = parse_datetime(data.get("scheduled_date"))
    except ValueError:
        return validation_error("Invalid estimated cost or scheduled date")

    images = save_images(request.files.getlist("images"), MAINTENANCE_IMAGES,
                         current_app.config["MAX_MAINTENANCE_IMAGES"])
    report = MaintenanceReport(
        issue_type=data["issue_type"],
        description=data["description"],
        priority=data["priority"],
        contractor_id=contractor["id"],
        contractor_name=contractor["name"],
        contractor_phone=contractor["phone"],
        status="reported",
        estimated_cost=estimated_cost,
        scheduled_date=scheduled_date,
        reported_date=utcnow(),
        images=images,
    )
    flat.maintenance_reports.append(report)
    db.session.commit()

    emit("maintenance_reported", flat_id=flat.id, report_id=report.id,
         issue_type=report.issue_type, priority=report.priority)
    emit("contractor_assigned", report_id=report.id, contractor_id=contractor["id"])
    return jsonify({
        "message": "Maintenance issue reported successfully",
        "maintenance_report": report.serialize(),
        "contractor": contractor,
        "flat": flat.serialize(),
    }), 201


@bp.get("/<int:flat_id>/maintenance")
@jwt_required()
def list_maintenance(flat_id):
    flat = load_owned_flat(flat_id)
    reports = [_with_contractor(r) for r in flat.maintenance_reports]
    return jsonify({
        "message": "Maintenance reports retrieved successfully",
        "flat_id": flat.id,
        "flat_title": flat.title,
        "reports": _newest_first(reports),
    }), 200


@bp.put("/<int:flat_id>/maintenance/<int:report_id>")
@jwt_required()
def update_maintenance(flat_id, report_id):
    data = json_body()
    flat = load_owned_flat(flat_id)
    report = _find_report(flat, report_id)

    status = data.get("status")
    if status and status not in MAINTENANCE_STATUSES:
        return validation_error("Status must be one of: " + ", ".join(MAINTENANCE_STATUSES))
    try:
        actual_cost = parse_amount(data.get("actual_cost"))
        completion_date = parse_datetime(data.get("completion_date"))
    except ValueError:
        return validation_error("Invalid actual cost or completion date")

    report.apply_update(status=status, actual_cost=actual_cost,
                        completion_date=completion_date, notes=data.get("notes"))
    db.session.commit()

    emit("maintenance_updated", flat_id=flat.id, report_id=report.id, status=report.status)
    return jsonify({
        "message": "Maintenance status updated successfully",
        "report": report.serialize(),
        "flat": flat.serialize(),
    }), 200


@bp.delete("/<int:flat_id>/maintenance/<int:report_id>")
@jwt_required()
def delete_maintenance(flat_id, report_id):
    flat = load_owned_flat(flat_id)
    report = _find_report(flat, report_id)
    images = list(report.images or [])

    flat.maintenance_reports.remove(report)
    db.session.commit()
    delete_images(images, MAINTENANCE_IMAGES)

    emit("maintenance_deleted", flat_id=flat.id, report_id=report_id)
    return jsonify({"message": "Maintenance report deleted successfully", "flat": flat.serialize()}), 200


@bp.get("/maintenance/all")
@jwt_required()
def all_maintenance():
    flats = Flat.query.filter_by(user_id=current_user_id()).all()
    reports = [
        _with_contractor(r, flat_id=flat.id, flat_title=flat.title)
        for flat in flats
        for r in flat.maintenance_reports
    ]
    return jsonify({
        "message": "All maintenance reports retrieved successfully",
        "total_reports": len(reports),
        "reports": _newest_first(reports),
    }), 200
