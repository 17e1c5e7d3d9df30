from . import db
from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float

TENANT_FIELDS = ('name', 'email', 'phone', 'move_in_date', 'rent_amount')


class Flat(db.Model):
    __tablename__ = 'flats'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Listing details
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    address = db.Column(db.String(512), nullable=True)
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Integer, nullable=True)
    carpark = db.Column(db.Boolean, nullable=True)
    vacant = db.Column(db.Boolean, default=True, nullable=False)
    inspection_date = db.Column(db.DateTime, nullable=True)
    images = db.Column(db.JSON, default=list, nullable=False)

    # Current tenant snapshot
    tenant_name = db.Column(db.String(255), nullable=True)
    tenant_email = db.Column(db.String(255), nullable=True)
    tenant_phone = db.Column(db.String(50), nullable=True)
    tenant_move_in_date = db.Column(db.DateTime, nullable=True)
    tenant_rent_amount = db.Column(db.Numeric(10, 2), nullable=True)

    # Metadata
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Embedded records
    invoices = db.relationship('Invoice', backref='flat', lazy=True,
                               cascade='all, delete-orphan', order_by='Invoice.id')
    payment_logs = db.relationship('PaymentLog', backref='flat', lazy=True,
                                   cascade='all, delete-orphan', order_by='PaymentLog.id')
    maintenance_reports = db.relationship('MaintenanceReport', backref='flat', lazy=True,
                                          cascade='all, delete-orphan', order_by='MaintenanceReport.id')
    tenants = db.relationship('Tenant', backref='flat', lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Flat {self.id}: {self.title}>'

    @property
    def has_tenant(self):
        return bool(self.tenant_name)

    @property
    def tenant_details(self):
        if not self.has_tenant:
            return None
        return {
            'name': self.tenant_name,
            'email': self.tenant_email,
            'phone': self.tenant_phone,
            'move_in_date': isoformat(self.tenant_move_in_date),
            'rent_amount': to_float(self.tenant_rent_amount),
        }

    def set_tenant_details(self, **fields):
        """Update the snapshot; only keys that are passed are touched."""
        for key, value in fields.items():
            if key not in TENANT_FIELDS:
                raise KeyError(key)
            setattr(self, f'tenant_{key}', value)

    def clear_tenant_details(self):
        for key in TENANT_FIELDS:
            setattr(self, f'tenant_{key}', None)

    def owned_by(self, user_id):
        return self.user_id is not None and str(self.user_id) == str(user_id)

    def serialize(self, include_records=True, include_tenant=True):
        """JSON view of the flat.

        The public listing turns off both flags so that neither the tenant
        snapshot nor the bookkeeping records leave the owner's account.
        """
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'description': self.description,
            'address': self.address,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'carpark': self.carpark,
            'vacant': self.vacant,
            'inspection_date': isoformat(self.inspection_date),
            'images': list(self.images or []),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if include_tenant:
            data['tenant_details'] = self.tenant_details
        if include_records:
            data['invoices'] = [i.serialize() for i in self.invoices]
            data['payment_logs'] = [p.serialize() for p in self.payment_logs]
            data['maintenance_reports'] = [m.serialize() for m in self.maintenance_reports]
        return data
