from passlib.hash import pbkdf2_sha256 as hasher

from . import db
from flatdesk.utils.dates import isoformat, utcnow


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    address = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    flats = db.relationship('Flat', backref='owner', lazy=True)

    def __repr__(self):
        return f'<User {self.id}: {self.email}>'

    def set_password(self, raw):
        self.password_hash = hasher.hash(raw)

    def check_password(self, raw):
        return hasher.verify(raw, self.password_hash)

    def serialize(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'address': self.address,
            'created_at': isoformat(self.created_at),
        }
