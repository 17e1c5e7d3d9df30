# flatdesk/routes/payments.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from flatdesk.errors import ApiError, validation_error
from flatdesk.extensions import db
from flatdesk.models import Flat
from flatdesk.security import current_user_id, load_owned_flat
from flatdesk.services import billing
from flatdesk.services.arrears import compute_arrears, serialize_arrears
from flatdesk.services.events import emit
from flatdesk.utils.parsing import json_body

bp = Blueprint("payments", __name__)


@bp.post("/<int:flat_id>/invoices")
@jwt_required()
def generate_invoice(flat_id):
    """Raise a rental or maintenance invoice against a flat"""
    data = json_body()
    error = billing.validate_invoice(data)
    if error:
        return validation_error(error)

    flat = load_owned_flat(flat_id)
    invoice = billing.build_invoice(flat, data)
    flat.invoices.append(invoice)
    db.session.commit()

    emit("invoice_generated", flat_id=flat.id, invoice_id=invoice.id,
         type=invoice.type, amount=invoice.amount)
    return jsonify({
        "message": "Invoice generated successfully",
        "invoice": invoice.serialize(),
        "flat": flat.serialize(),
    }), 201


@bp.get("/<int:flat_id>/invoices")
@jwt_required()
def list_invoices(flat_id):
    flat = load_owned_flat(flat_id)
    invoices = sorted(flat.invoices, key=lambda i: (i.issue_date, i.id), reverse=True)
    return jsonify({
        "message": "Invoices retrieved successfully",
        "flat_id": flat.id,
        "flat_title": flat.title,
        "invoices": [i.serialize() for i in invoices],
    }), 200


@bp.post("/<int:flat_id>/payments")
@jwt_required()
def record_payment(flat_id):
    """Log a payment; a linked invoice on the same flat is marked paid"""
    data = json_body()
    error = billing.validate_payment(data)
    if error:
        return validation_error(error)

    flat = load_owned_flat(flat_id)
    payment = billing.build_payment(data)
    flat.payment_logs.append(payment)

    invoice = billing.find_invoice(flat, payment.invoice_id)
    if invoice is not None:
        invoice.mark_paid()
    db.session.commit()

    emit("payment_recorded", flat_id=flat.id, payment_id=payment.id,
         amount=payment.amount, invoice_id=payment.invoice_id)
    return jsonify({
        "message": "Payment recorded successfully",
        "payment": payment.serialize(),
        "flat": flat.serialize(),
    }), 201


@bp.get("/<int:flat_id>/payments")
@jwt_required()
def list_payments(flat_id):
    flat = load_owned_flat(flat_id)
    payments = sorted(flat.payment_logs, key=lambda p: (p.recorded_date, p.id), reverse=True)
    return jsonify({
        "message": "Payment logs retrieved successfully",
        "flat_id": flat.id,
        "flat_title": flat.title,
        "payments": [p.serialize() for p in payments],
    }), 200


@bp.delete("/<int:flat_id>/payments/<int:payment_id>")
@jwt_required()
def delete_payment(flat_id, payment_id):
    flat = load_owned_flat(flat_id)
    if not flat.payment_logs:
        raise ApiError(404, "No payment logs found for this flat")

    payment = next((p for p in flat.payment_logs if p.id == payment_id), None)
    if payment is None:
        raise ApiError(404, "Payment not found")

    # the invoice is owed again once no remaining payment settles it
    invoice = billing.find_invoice(flat, payment.invoice_id)
    still_settled = any(p.invoice_id == payment.invoice_id
                        for p in flat.payment_logs if p is not payment)
    if invoice is not None and invoice.status == "paid" and not still_settled:
        invoice.mark_pending()

    flat.payment_logs.remove(payment)
    db.session.commit()

    emit("payment_deleted", flat_id=flat.id, payment_id=payment_id)
    return jsonify({"message": "Payment deleted successfully", "flat": flat.serialize()}), 200


@bp.get("/arrears/tracking")
@jwt_required()
def arrears_tracking():
    flats = (Flat.query
             .filter(Flat.user_id == current_user_id(), Flat.tenant_name.isnot(None))
             .all())
    result = compute_arrears(flats)

    emit("arrears_calculated", flats_in_arrears=result["total_flats_in_arrears"],
         total=result["total_arrears_amount"])
    return jsonify({
        "message": "Arrears tracking retrieved successfully",
        **serialize_arrears(result),
    }), 200
