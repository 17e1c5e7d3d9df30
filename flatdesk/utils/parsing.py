from decimal import Decimal, InvalidOperation

from flask import request

from flatdesk.errors import ApiError


def json_body():
    """JSON body of the current request; anything but an object is rejected."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ApiError(400, "Request body must be a JSON object", "validation_error")
    return data


def request_data():
    """Body of the current request as a plain dict.

    Multipart forms (image uploads) and JSON bodies are both accepted.
    """
    if request.content_type and request.content_type.startswith("multipart/form-data"):
        return request.form.to_dict()
    return json_body()


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def parse_bool(v):
    if isinstance(v, bool):
        return v
    s = str(v or "").strip().lower()
    return s in ("1", "true", "yes", "y", "on")


def parse_int(v):
    if is_blank(v):
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid number: {v!r}")


def parse_amount(v):
    """Money values come in as numbers or numeric strings."""
    if is_blank(v):
        return None
    try:
        amount = Decimal(str(v))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {v!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {v!r}")
    return amount


def to_float(v):
    return float(v) if v is not None else None
