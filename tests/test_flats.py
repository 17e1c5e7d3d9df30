import os

import pytest

from conftest import FLAT, TENANT, image
from flatdesk.models import Tenant


def stored(app, kind, name):
    return os.path.join(app.config["UPLOAD_FOLDER"], kind, name)


class TestCreateFlat:
    def test_json_body(self, client, auth_headers, owner):
        resp = client.post("/api/flats", json=FLAT, headers=auth_headers)

        assert resp.status_code == 201
        flat = resp.get_json()
        assert flat["user_id"] == owner.id
        assert flat["title"] == "Harbour View"
        assert flat["bedrooms"] == 2
        assert flat["carpark"] is True
        assert flat["vacant"] is True
        assert flat["images"] == []
        assert flat["tenant_details"] is None
        assert flat["invoices"] == []
        assert flat["payment_logs"] == []
        assert flat["maintenance_reports"] == []

    @pytest.mark.parametrize("field, message", [
        ("title", "Title is required"),
        ("address", "Address is required"),
        ("bedrooms", "Number of bedrooms is required"),
        ("bathrooms", "Number of bathrooms is required"),
        ("carpark", "Carpark information is required"),
    ])
    def test_required_fields(self, client, auth_headers, field, message):
        payload = {k: v for k, v in FLAT.items() if k != field}
        resp = client.post("/api/flats", json=payload, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "validation_error", "message": message}

    def test_carpark_false_is_accepted(self, client, auth_headers):
        resp = client.post("/api/flats", json={**FLAT, "carpark": False}, headers=auth_headers)

        assert resp.status_code == 201
        assert resp.get_json()["carpark"] is False

    def test_bedrooms_must_be_numeric(self, client, auth_headers):
        resp = client.post("/api/flats", json={**FLAT, "bedrooms": "lots"}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Number of bedrooms must be a number"

    @pytest.mark.parametrize("field", ["bedrooms", "bathrooms"])
    def test_infinite_room_count(self, client, auth_headers, field):
        resp = client.post("/api/flats", json={**FLAT, field: "inf"}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == f"Number of {field} must be a number"

    def test_overflowing_json_number(self, client, auth_headers):
        body = '{"title": "Loft", "address": "9 Mill Lane", "bedrooms": 1e400, "bathrooms": 1, "carpark": true}'
        resp = client.post("/api/flats", data=body, content_type="application/json", headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Number of bedrooms must be a number"

    def test_list_body(self, client, auth_headers):
        resp = client.post("/api/flats", json=[FLAT], headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Request body must be a JSON object"

    def test_multipart_with_images(self, app, client, auth_headers):
        data = {
            "title": "Loft", "address": "9 Mill Lane", "bedrooms": "1", "bathrooms": "1",
            "carpark": "false", "images": [image("front.png"), image("kitchen.jpg", mimetype="image/jpeg")],
        }
        resp = client.post("/api/flats", data=data, headers=auth_headers, content_type="multipart/form-data")

        assert resp.status_code == 201
        flat = resp.get_json()
        assert flat["carpark"] is False
        assert len(flat["images"]) == 2
        assert flat["images"][0].endswith(".png")
        assert flat["images"][1].endswith(".jpg")
        for name in flat["images"]:
            assert os.path.exists(stored(app, "flats", name))

    def test_rejects_non_image_upload(self, client, auth_headers):
        data = {**{k: str(v) for k, v in FLAT.items()},
                "images": [image("notes.txt", b"hello", "text/plain")]}
        resp = client.post("/api/flats", data=data, headers=auth_headers, content_type="multipart/form-data")

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Only image files are allowed."

    def test_rejects_too_many_images(self, app, client, auth_headers):
        app.config["MAX_FLAT_IMAGES"] = 1
        data = {**{k: str(v) for k, v in FLAT.items()}, "images": [image("a.png"), image("b.png")]}
        resp = client.post("/api/flats", data=data, headers=auth_headers, content_type="multipart/form-data")

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Too many files. Maximum is 1 files."

    def test_rejects_oversized_image(self, app, client, auth_headers):
        app.config["MAX_IMAGE_SIZE"] = 4
        data = {**{k: str(v) for k, v in FLAT.items()}, "images": [image("big.png", b"0123456789")]}
        resp = client.post("/api/flats", data=data, headers=auth_headers, content_type="multipart/form-data")

        assert resp.status_code == 400
        assert resp.get_json()["message"].startswith("File size too large")

    def test_requires_token(self, client):
        assert client.post("/api/flats", json=FLAT).status_code == 401


class TestListFlats:
    def test_only_own_flats(self, client, auth_headers, stranger_headers, create_flat):
        mine = create_flat()
        create_flat(headers=stranger_headers, title="Someone else's")

        resp = client.get("/api/flats", headers=auth_headers)

        assert resp.status_code == 200
        assert [f["id"] for f in resp.get_json()] == [mine["id"]]

    def test_public_listing_needs_no_token(self, client, create_flat, stranger_headers):
        first = create_flat()
        second = create_flat(headers=stranger_headers, title="Garden Studio")

        resp = client.get("/api/flats/public/all")

        assert resp.status_code == 200
        items = resp.get_json()
        assert [f["id"] for f in items] == [second["id"], first["id"]]
        assert items[0]["owner"] == {"name": "Sam Stranger", "email": "stranger@example.com"}
        assert "invoices" not in items[0]
        assert "payment_logs" not in items[0]
        assert "maintenance_reports" not in items[0]

    def test_public_listing_hides_tenant(self, client, auth_headers, flat):
        client.post(f"/api/flats/{flat['id']}/tenant", json=TENANT, headers=auth_headers)

        items = client.get("/api/flats/public/all").get_json()

        assert items[0]["id"] == flat["id"]
        assert items[0]["vacant"] is False
        assert "tenant_details" not in items[0]
        assert TENANT["email"] not in str(items)


class TestUpdateFlat:
    def test_partial_update_ignores_empty_values(self, client, auth_headers, flat):
        resp = client.put(f"/api/flats/{flat['id']}", headers=auth_headers,
                          json={"title": "", "bedrooms": 3, "inspection_date": "2024-06-01"})

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["title"] == "Harbour View"
        assert body["bedrooms"] == 3
        assert body["inspection_date"] == "2024-06-01T00:00:00"

    def test_new_images_are_appended(self, client, auth_headers):
        flat = client.post("/api/flats", headers=auth_headers, content_type="multipart/form-data",
                           data={**{k: str(v) for k, v in FLAT.items()}, "images": [image("one.png")]}).get_json()

        resp = client.put(f"/api/flats/{flat['id']}", headers=auth_headers, content_type="multipart/form-data",
                          data={"images": [image("two.png")]})

        assert resp.status_code == 200
        images = resp.get_json()["images"]
        assert len(images) == 2
        assert images[0] == flat["images"][0]

    def test_not_found(self, client, auth_headers):
        resp = client.put("/api/flats/9999", json={"title": "x"}, headers=auth_headers)

        assert resp.status_code == 404
        assert resp.get_json() == {"error": "not_found", "message": "Flat not found"}

    def test_other_owner_forbidden(self, client, stranger_headers, flat):
        resp = client.put(f"/api/flats/{flat['id']}", json={"title": "Mine now"}, headers=stranger_headers)

        assert resp.status_code == 403
        assert resp.get_json() == {"error": "forbidden", "message": "Not authorized"}


class TestDeleteFlat:
    def test_delete_removes_flat_records_and_files(self, app, client, auth_headers):
        flat = client.post("/api/flats", headers=auth_headers, content_type="multipart/form-data",
                           data={**{k: str(v) for k, v in FLAT.items()}, "images": [image()]}).get_json()
        client.post(f"/api/flats/{flat['id']}/tenant", json=TENANT, headers=auth_headers)
        path = stored(app, "flats", flat["images"][0])
        assert os.path.exists(path)

        resp = client.delete(f"/api/flats/{flat['id']}", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Flat deleted"}
        assert not os.path.exists(path)
        assert Tenant.query.count() == 0
        assert client.get("/api/flats", headers=auth_headers).get_json() == []

    def test_other_owner_forbidden(self, client, stranger_headers, flat):
        assert client.delete(f"/api/flats/{flat['id']}", headers=stranger_headers).status_code == 403

    def test_not_found(self, client, auth_headers):
        assert client.delete("/api/flats/9999", headers=auth_headers).status_code == 404


class TestFlatImages:
    def test_delete_single_image(self, app, client, auth_headers):
        flat = client.post("/api/flats", headers=auth_headers, content_type="multipart/form-data",
                           data={**{k: str(v) for k, v in FLAT.items()},
                                 "images": [image("a.png"), image("b.png")]}).get_json()
        gone, kept = flat["images"]

        resp = client.delete(f"/api/flats/{flat['id']}/images/{gone}", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["message"] == "Image deleted successfully"
        assert body["flat"]["images"] == [kept]
        assert not os.path.exists(stored(app, "flats", gone))
        assert os.path.exists(stored(app, "flats", kept))

    def test_unknown_image(self, client, auth_headers, flat):
        resp = client.delete(f"/api/flats/{flat['id']}/images/missing.png", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.get_json()["message"] == "Image not found"

    def test_uploaded_image_is_served(self, client, auth_headers):
        flat = client.post("/api/flats", headers=auth_headers, content_type="multipart/form-data",
                           data={**{k: str(v) for k, v in FLAT.items()},
                                 "images": [image(data=b"pixels")]}).get_json()

        resp = client.get(f"/uploads/flats/{flat['images'][0]}")

        assert resp.status_code == 200
        assert resp.data == b"pixels"
