"""Static directory of the contractors maintenance jobs can be assigned to."""

CONTRACTORS = (
    {'id': '1', 'name': 'ABC Plumbing Services', 'specialization': 'plumbing',
     'phone': '+1234567890', 'email': 'contact@abcplumbing.com'},
    {'id': '2', 'name': 'Quick Fix Electricians', 'specialization': 'electrical',
     'phone': '+1234567891', 'email': 'info@quickfixelectric.com'},
    {'id': '3', 'name': 'Elite Carpentry Works', 'specialization': 'carpentry',
     'phone': '+1234567892', 'email': 'hello@elitecarpentry.com'},
    {'id': '4', 'name': 'ProClean Maintenance', 'specialization': 'cleaning',
     'phone': '+1234567893', 'email': 'service@proclean.com'},
    {'id': '5', 'name': 'AllFix General Services', 'specialization': 'general',
     'phone': '+1234567894', 'email': 'support@allfix.com'},
)

_BY_ID = {c['id']: c for c in CONTRACTORS}


def list_contractors():
    return [dict(c) for c in CONTRACTORS]


def get_contractor(contractor_id):
    """Look a contractor up by id; ids arrive as ints from JSON and strings from forms."""
    if contractor_id is None:
        return None
    contractor = _BY_ID.get(str(contractor_id).strip())
    return dict(contractor) if contractor else None
