"""Invoice and payment rules shared by the payment routes."""
from flatdesk.errors import ApiError
from flatdesk.models import Invoice, PaymentLog, INVOICE_TYPES, PAYMENT_METHODS
from flatdesk.utils.dates import parse_datetime, utcnow
from flatdesk.utils.parsing import is_blank, parse_amount, parse_int


def _positive_amount(data):
    try:
        amount = parse_amount(data.get('amount'))
    except ValueError:
        return None
    if amount is None or amount <= 0:
        return None
    return amount


def validate_invoice(data):
    """Return the first problem with an invoice payload, or None."""
    if _positive_amount(data) is None:
        return 'Amount is required and must be greater than 0'
    if is_blank(data.get('due_date')):
        return 'Due date is required'
    if data.get('type') not in INVOICE_TYPES:
        return 'Valid invoice type is required'
    try:
        parse_datetime(data['due_date'])
    except ValueError:
        return 'Due date must be a valid date'
    return None


def validate_payment(data):
    """Return the first problem with a payment payload, or None."""
    if _positive_amount(data) is None:
        return 'Amount is required and must be greater than 0'
    if is_blank(data.get('payment_date')):
        return 'Payment date is required'
    if is_blank(data.get('payment_method')):
        return 'Payment method is required'
    if data['payment_method'] not in PAYMENT_METHODS:
        return 'Payment method must be one of: ' + ', '.join(PAYMENT_METHODS)
    try:
        parse_datetime(data['payment_date'])
    except ValueError:
        return 'Payment date must be a valid date'
    try:
        parse_int(data.get('invoice_id'))
    except ValueError:
        return 'Invoice id must be a number'
    return None


def build_invoice(flat, data):
    """Create an invoice for ``flat`` from a validated payload.

    Rental invoices bill the current tenant and need one on the flat;
    maintenance invoices do not.
    """
    amount = parse_amount(data['amount'])
    due_date = parse_datetime(data['due_date'])

    if data['type'] == 'rental':
        if not flat.has_tenant:
            raise ApiError(400, 'Rental invoices require a tenant on the flat', 'validation_error')
        return Invoice(
            type='rental',
            tenant_name=flat.tenant_name,
            tenant_email=flat.tenant_email,
            flat_title=flat.title,
            amount=amount,
            due_date=due_date,
            issue_date=utcnow(),
            status='pending',
            description=f'Monthly rent for {flat.title}',
        )

    return Invoice(
        type='maintenance',
        flat_title=flat.title,
        amount=amount,
        due_date=due_date,
        issue_date=utcnow(),
        status='pending',
        description=data.get('description') or 'Maintenance charges',
    )


def build_payment(data):
    return PaymentLog(
        amount=parse_amount(data['amount']),
        payment_date=parse_datetime(data['payment_date']),
        payment_method=data['payment_method'],
        description=data.get('description') or '',
        invoice_id=parse_int(data.get('invoice_id')),
        recorded_date=utcnow(),
    )


def find_invoice(flat, invoice_id):
    if invoice_id is None:
        return None
    return next((inv for inv in flat.invoices if inv.id == invoice_id), None)
