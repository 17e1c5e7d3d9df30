from . import db
from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float

PAYMENT_METHODS = ('bank_transfer', 'cash', 'check', 'online', 'card')


class PaymentLog(db.Model):
    __tablename__ = 'payment_logs'

    id = db.Column(db.Integer, primary_key=True)
    flat_id = db.Column(db.Integer, db.ForeignKey('flats.id'), nullable=False, index=True)

    # Payment details
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_date = db.Column(db.DateTime, nullable=False)
    payment_method = db.Column(db.String(50), nullable=False)  # bank_transfer, cash, check, online, card
    description = db.Column(db.String(500), nullable=True, default='')
    invoice_id = db.Column(db.Integer, nullable=True)

    recorded_date = db.Column(db.DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f'<PaymentLog {self.id}: ${self.amount} via {self.payment_method}>'

    def serialize(self):
        return {
            'id': self.id,
            'flat_id': self.flat_id,
            'amount': to_float(self.amount),
            'payment_date': isoformat(self.payment_date),
            'payment_method': self.payment_method,
            'description': self.description,
            'invoice_id': self.invoice_id,
            'recorded_date': isoformat(self.recorded_date),
        }
