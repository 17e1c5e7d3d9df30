from . import db
from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float


class Tenant(db.Model):
    __tablename__ = 'tenants'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    flat_id = db.Column(db.Integer, db.ForeignKey('flats.id'), nullable=False, index=True)

    # Personal Information
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)

    # Tenancy
    move_in_date = db.Column(db.DateTime, nullable=True)
    move_out_date = db.Column(db.DateTime, nullable=True)
    rent_amount = db.Column(db.Numeric(10, 2), nullable=True)
    deposit_amount = db.Column(db.Numeric(10, 2), nullable=True)

    # Emergency Contact
    emergency_contact_name = db.Column(db.String(200), nullable=True)
    emergency_contact_phone = db.Column(db.String(50), nullable=True)
    emergency_contact_relationship = db.Column(db.String(50), nullable=True)

    # Metadata
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<Tenant {self.id}: {self.name}>'

    @property
    def is_current(self):
        """No move-out date recorded yet."""
        return self.move_out_date is None

    @property
    def emergency_contact(self):
        return {
            'name': self.emergency_contact_name,
            'phone': self.emergency_contact_phone,
            'relationship': self.emergency_contact_relationship,
        }

    @emergency_contact.setter
    def emergency_contact(self, value):
        value = value or {}
        self.emergency_contact_name = value.get('name')
        self.emergency_contact_phone = value.get('phone')
        self.emergency_contact_relationship = value.get('relationship')

    def serialize(self, include_flat=True):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'flat_id': self.flat_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'move_in_date': isoformat(self.move_in_date),
            'move_out_date': isoformat(self.move_out_date),
            'rent_amount': to_float(self.rent_amount),
            'deposit_amount': to_float(self.deposit_amount),
            'emergency_contact': self.emergency_contact,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if include_flat and self.flat is not None:
            data['flat'] = {
                'id': self.flat.id,
                'title': self.flat.title,
                'description': self.flat.description,
                'images': list(self.flat.images or []),
                'vacant': self.flat.vacant,
            }
        return data
