from . import db
from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float

INVOICE_TYPES = ('rental', 'maintenance')
INVOICE_STATUSES = ('pending', 'paid', 'overdue')


class Invoice(db.Model):
    __tablename__ = 'invoices'

    id = db.Column(db.Integer, primary_key=True)
    flat_id = db.Column(db.Integer, db.ForeignKey('flats.id'), nullable=False, index=True)

    type = db.Column(db.String(20), nullable=False)  # rental, maintenance
    tenant_name = db.Column(db.String(255), nullable=True)
    tenant_email = db.Column(db.String(255), nullable=True)
    flat_title = db.Column(db.String(255), nullable=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    issue_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    paid_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), default='pending', nullable=False)  # pending, paid, overdue
    description = db.Column(db.String(500), nullable=True)

    def __repr__(self):
        return f'<Invoice {self.id}: {self.type} {self.amount} - {self.status}>'

    def is_overdue(self, now):
        return self.status == 'pending' and self.due_date is not None and self.due_date < now

    def mark_paid(self, when=None):
        self.status = 'paid'
        self.paid_date = when or utcnow()

    def mark_pending(self):
        self.status = 'pending'
        self.paid_date = None

    def serialize(self):
        return {
            'id': self.id,
            'type': self.type,
            'tenant_name': self.tenant_name,
            'tenant_email': self.tenant_email,
            'flat_title': self.flat_title,
            'flat_id': self.flat_id,
            'amount': to_float(self.amount),
            'due_date': isoformat(self.due_date),
            'issue_date': isoformat(self.issue_date),
            'paid_date': isoformat(self.paid_date),
            'status': self.status,
            'description': self.description,
        }
