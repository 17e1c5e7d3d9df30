import io

import pytest
from flask_jwt_extended import create_access_token

from flatdesk import create_app
from flatdesk.config import TestConfig
from flatdesk.extensions import db
from flatdesk.models import User

FLAT = {
    "title": "Harbour View",
    "description": "Two bedroom flat by the water",
    "address": "1 Quay Street",
    "bedrooms": 2,
    "bathrooms": 1,
    "carpark": True,
}

TENANT = {
    "name": "Jane Tenant",
    "email": "jane@example.com",
    "phone": "021 555 0101",
    "move_in_date": "2024-01-15",
    "rent_amount": 1200,
}


@pytest.fixture
def app(tmp_path):
    config = type("Config", (TestConfig,), {"UPLOAD_FOLDER": str(tmp_path / "uploads")})
    app = create_app(config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(name, email):
    user = User(name=name, email=email)
    user.set_password("secret123")
    db.session.add(user)
    db.session.commit()
    return user


def _headers(user):
    token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(app):
    return _make_user("Olivia Owner", "owner@example.com")


@pytest.fixture
def stranger(app):
    return _make_user("Sam Stranger", "stranger@example.com")


@pytest.fixture
def auth_headers(owner):
    return _headers(owner)


@pytest.fixture
def stranger_headers(stranger):
    return _headers(stranger)


@pytest.fixture
def create_flat(client, auth_headers):
    def _create(headers=None, **overrides):
        resp = client.post("/api/flats", json={**FLAT, **overrides}, headers=headers or auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _create


@pytest.fixture
def flat(create_flat):
    return create_flat()


@pytest.fixture
def tenanted_flat(client, auth_headers, flat):
    resp = client.post(f"/api/flats/{flat['id']}/tenant", json=TENANT, headers=auth_headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["flat"]


def image(name="photo.png", data=b"\x89PNG\r\n\x1a\nfake", mimetype="image/png"):
    """A file tuple the Flask test client sends as a multipart upload."""
    return (io.BytesIO(data), name, mimetype)
