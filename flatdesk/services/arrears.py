"""Arrears tracking across a landlord's flats.

An invoice is in arrears when it is still ``pending`` and its due date has
passed. Per flat we report the overdue total, how many invoices it covers and
how long the oldest one has been outstanding; the flats are then ranked by the
amount owed.
"""
from decimal import Decimal

from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float

SECONDS_PER_DAY = 86400


def flat_arrears(flat, now):
    """Arrears summary for one flat, or ``None`` when nothing is overdue."""
    overdue = [inv for inv in flat.invoices if inv.is_overdue(now)]
    if not overdue:
        return None

    total = sum((Decimal(inv.amount) for inv in overdue), Decimal('0'))
    oldest = min(overdue, key=lambda inv: inv.due_date)
    days_past_due = int((now - oldest.due_date).total_seconds() // SECONDS_PER_DAY)

    return {
        'flat_id': flat.id,
        'flat_title': flat.title,
        'tenant_name': flat.tenant_name,
        'tenant_email': flat.tenant_email,
        'total_arrears_amount': total,
        'overdue_invoices_count': len(overdue),
        'oldest_overdue_date': oldest.due_date,
        'days_past_due': days_past_due,
        'overdue_invoices': overdue,
    }


def compute_arrears(flats, now=None):
    """Aggregate arrears over ``flats``; only flats with a tenant are considered.

    Amounts stay ``Decimal`` and invoices stay model objects; use
    :func:`serialize_arrears` to turn the result into JSON.
    """
    now = now or utcnow()
    entries = []
    for flat in flats:
        if not flat.has_tenant:
            continue
        entry = flat_arrears(flat, now)
        if entry:
            entries.append(entry)

    entries.sort(key=lambda e: e['total_arrears_amount'], reverse=True)
    return {
        'total_flats_in_arrears': len(entries),
        'total_arrears_amount': sum((e['total_arrears_amount'] for e in entries), Decimal('0')),
        'arrears_data': entries,
    }


def serialize_arrears(result):
    return {
        'total_flats_in_arrears': result['total_flats_in_arrears'],
        'total_arrears_amount': to_float(result['total_arrears_amount']),
        'arrears_data': [
            {
                **entry,
                'total_arrears_amount': to_float(entry['total_arrears_amount']),
                'oldest_overdue_date': isoformat(entry['oldest_overdue_date']),
                'overdue_invoices': [inv.serialize() for inv in entry['overdue_invoices']],
            }
            for entry in result['arrears_data']
        ],
    }
