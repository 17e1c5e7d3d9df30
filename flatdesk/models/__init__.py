from flatdesk.extensions import db

from .user import User
from .flat import Flat
from .invoice import Invoice, INVOICE_TYPES, INVOICE_STATUSES
from .payment import PaymentLog, PAYMENT_METHODS
from .maintenance import MaintenanceReport, ISSUE_TYPES, PRIORITIES, MAINTENANCE_STATUSES
from .tenant import Tenant
