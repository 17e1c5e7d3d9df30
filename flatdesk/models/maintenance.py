from . import db
from flatdesk.utils.dates import isoformat, utcnow
from flatdesk.utils.parsing import to_float

ISSUE_TYPES = (
    'plumbing', 'electrical', 'heating', 'cooling', 'appliance', 'structural',
    'pest_control', 'cleaning', 'painting', 'carpentry', 'other',
)
PRIORITIES = ('low', 'medium', 'high', 'urgent')
MAINTENANCE_STATUSES = ('reported', 'assigned', 'in_progress', 'completed', 'cancelled')


class MaintenanceReport(db.Model):
    __tablename__ = 'maintenance_reports'

    id = db.Column(db.Integer, primary_key=True)
    flat_id = db.Column(db.Integer, db.ForeignKey('flats.id'), nullable=False, index=True)

    # Issue Information
    issue_type = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), nullable=False)

    # Contractor
    contractor_id = db.Column(db.String(20), nullable=False)
    contractor_name = db.Column(db.String(200), nullable=True)
    contractor_phone = db.Column(db.String(50), nullable=True)

    status = db.Column(db.String(32), default='reported', nullable=False)

    # Financial
    estimated_cost = db.Column(db.Numeric(10, 2), nullable=True)
    actual_cost = db.Column(db.Numeric(10, 2), nullable=True)

    # Scheduling
    scheduled_date = db.Column(db.DateTime, nullable=True)
    reported_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    completion_date = db.Column(db.DateTime, nullable=True)
    last_updated = db.Column(db.DateTime, nullable=True)

    notes = db.Column(db.Text, nullable=True)
    images = db.Column(db.JSON, default=list, nullable=False)

    def __repr__(self):
        return f'<MaintenanceReport {self.id}: {self.issue_type} - {self.status}>'

    def apply_update(self, status=None, actual_cost=None, completion_date=None, notes=None):
        """Apply a status update from the landlord and stamp last_updated."""
        now = utcnow()
        if status:
            self.status = status
        if actual_cost is not None:
            self.actual_cost = actual_cost
        if completion_date:
            self.completion_date = completion_date
        elif status == 'completed' and not self.completion_date:
            self.completion_date = now
        if notes:
            self.notes = notes
        self.last_updated = now

    def serialize(self):
        return {
            'id': self.id,
            'flat_id': self.flat_id,
            'issue_type': self.issue_type,
            'description': self.description,
            'priority': self.priority,
            'contractor_id': self.contractor_id,
            'contractor_name': self.contractor_name,
            'contractor_phone': self.contractor_phone,
            'status': self.status,
            'estimated_cost': to_float(self.estimated_cost),
            'actual_cost': to_float(self.actual_cost),
            'scheduled_date': isoformat(self.scheduled_date),
            'reported_date': isoformat(self.reported_date),
            'completion_date': isoformat(self.completion_date),
            'last_updated': isoformat(self.last_updated),
            'notes': self.notes,
            'images': list(self.images or []),
        }
