"""Keeps the tenant snapshot on a flat and the tenant records in step.

A flat carries a denormalized copy of its current occupant; the ``tenants``
table holds the fuller record and the history. Whichever side is edited, the
fields they share are copied across.
"""
from flatdesk.models import Tenant
from flatdesk.utils.dates import parse_datetime, utcnow
from flatdesk.utils.parsing import is_blank, parse_amount

SHARED_FIELDS = ('name', 'email', 'phone', 'move_in_date', 'rent_amount')
RECORD_FIELDS = SHARED_FIELDS + ('move_out_date', 'deposit_amount', 'notes')

_DATE_FIELDS = ('move_in_date', 'move_out_date')
_AMOUNT_FIELDS = ('rent_amount', 'deposit_amount')


def parse_tenant_fields(data, fields=SHARED_FIELDS):
    """Pick and convert the tenant fields present in ``data``.

    Raises ValueError naming the field when a date or amount does not parse.
    """
    out = {}
    for field in fields:
        if field not in data:
            continue
        value = data[field]
        try:
            if field in _DATE_FIELDS:
                value = parse_datetime(value)
            elif field in _AMOUNT_FIELDS:
                value = parse_amount(value)
            elif isinstance(value, str):
                value = value.strip() or None
        except ValueError:
            raise ValueError(f'{field} is not valid')
        out[field] = value
    return out


def current_record(flat):
    """The tenant record matching the flat's occupant, newest first."""
    return (Tenant.query
            .filter_by(flat_id=flat.id, move_out_date=None)
            .order_by(Tenant.created_at.desc(), Tenant.id.desc())
            .first())


def is_occupant(record):
    """Whether ``record`` is the tenant shown on its flat right now.

    An open record is not enough: a stale record can lose its move-out date
    while a newer tenant lives in the flat.
    """
    flat = record.flat
    if flat is None or not flat.has_tenant or not record.is_current:
        return False
    return current_record(flat) is record


def move_in(flat, fields, emergency_contact=None):
    """Put a tenant into a vacant flat; returns the new tenant record."""
    flat.set_tenant_details(**{k: v for k, v in fields.items() if k in SHARED_FIELDS})
    flat.vacant = False
    record = Tenant(user_id=flat.user_id, **fields)
    if isinstance(emergency_contact, dict):
        record.emergency_contact = emergency_contact
    flat.tenants.append(record)
    return record


def move_out(flat):
    """Clear the flat's occupant and close the matching record, if any."""
    record = current_record(flat)
    if record is not None:
        record.move_out_date = utcnow()
    flat.clear_tenant_details()
    flat.vacant = True
    return record


def update_snapshot(flat, fields):
    """Apply a partial update to the flat's occupant and mirror it to the record."""
    flat.set_tenant_details(**fields)
    record = current_record(flat)
    if record is not None:
        for key, value in fields.items():
            setattr(record, key, value)
    return record


def sync_snapshot_from_record(record):
    """Copy shared fields from a current record onto its flat."""
    if not is_occupant(record):
        return
    record.flat.set_tenant_details(**{f: getattr(record, f) for f in SHARED_FIELDS})


def validate_name(data):
    if is_blank(data.get('name')):
        return 'Tenant name is required'
    return None
