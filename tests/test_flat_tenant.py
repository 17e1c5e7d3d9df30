from conftest import TENANT


def tenant_url(flat):
    return f"/api/flats/{flat['id']}/tenant"


class TestAddTenant:
    def test_moves_tenant_in(self, client, auth_headers, flat):
        resp = client.post(tenant_url(flat), json={**TENANT, "deposit_amount": 2400,
                                                   "emergency_contact": {"name": "Joe", "phone": "1",
                                                                         "relationship": "brother"}},
                           headers=auth_headers)

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "Tenant added successfully"
        assert body["tenant"] == {
            "name": "Jane Tenant",
            "email": "jane@example.com",
            "phone": "021 555 0101",
            "move_in_date": "2024-01-15T00:00:00",
            "rent_amount": 1200.0,
        }
        assert body["flat"]["vacant"] is False
        assert body["flat"]["tenant_details"]["name"] == "Jane Tenant"

        record = body["tenant_record"]
        assert record["flat_id"] == flat["id"]
        assert record["deposit_amount"] == 2400.0
        assert record["move_out_date"] is None
        assert record["emergency_contact"]["relationship"] == "brother"

    def test_name_checked_before_flat_lookup(self, client, auth_headers):
        resp = client.post("/api/flats/9999/tenant", json={"email": "x@example.com"}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Tenant name is required"

    def test_flat_already_let(self, client, auth_headers, tenanted_flat):
        resp = client.post(tenant_url(tenanted_flat), json={"name": "Second"}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Flat already has a tenant"

    def test_invalid_rent(self, client, auth_headers, flat):
        resp = client.post(tenant_url(flat), json={"name": "Jane", "rent_amount": "a lot"}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["message"] == "rent_amount is not valid"

    def test_flat_not_found(self, client, auth_headers):
        resp = client.post("/api/flats/9999/tenant", json=TENANT, headers=auth_headers)
        assert resp.status_code == 404

    def test_other_owner_forbidden(self, client, stranger_headers, flat):
        resp = client.post(tenant_url(flat), json=TENANT, headers=stranger_headers)
        assert resp.status_code == 403


class TestGetTenant:
    def test_returns_snapshot(self, client, auth_headers, tenanted_flat):
        resp = client.get(tenant_url(tenanted_flat), headers=auth_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["flat_id"] == tenanted_flat["id"]
        assert body["flat_title"] == "Harbour View"
        assert body["tenant"]["email"] == "jane@example.com"

    def test_vacant_flat(self, client, auth_headers, flat):
        resp = client.get(tenant_url(flat), headers=auth_headers)

        assert resp.status_code == 404
        assert resp.get_json()["message"] == "No tenant found for this flat"


class TestUpdateTenant:
    def test_partial_update_syncs_record(self, client, auth_headers, tenanted_flat):
        resp = client.put(tenant_url(tenanted_flat), json={"phone": "027 000 0000", "rent_amount": "1250.50"},
                          headers=auth_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["message"] == "Tenant updated successfully"
        assert body["tenant"]["name"] == "Jane Tenant"
        assert body["tenant"]["phone"] == "027 000 0000"
        assert body["tenant"]["rent_amount"] == 1250.5

        records = client.get(f"/api/tenants/flat/{tenanted_flat['id']}", headers=auth_headers).get_json()
        assert records[0]["phone"] == "027 000 0000"
        assert records[0]["rent_amount"] == 1250.5

    def test_blank_name_is_ignored(self, client, auth_headers, tenanted_flat):
        resp = client.put(tenant_url(tenanted_flat), json={"name": "  "}, headers=auth_headers)

        assert resp.status_code == 200
        assert resp.get_json()["tenant"]["name"] == "Jane Tenant"

    def test_vacant_flat(self, client, auth_headers, flat):
        resp = client.put(tenant_url(flat), json={"phone": "1"}, headers=auth_headers)

        assert resp.status_code == 404
        assert resp.get_json()["message"] == "No tenant found for this flat to update"


class TestRemoveTenant:
    def test_moves_tenant_out(self, client, auth_headers, tenanted_flat):
        resp = client.delete(tenant_url(tenanted_flat), headers=auth_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["message"] == "Tenant removed successfully"
        assert body["flat"]["vacant"] is True
        assert body["flat"]["tenant_details"] is None

        record = client.get(f"/api/tenants/flat/{tenanted_flat['id']}", headers=auth_headers).get_json()[0]
        assert record["move_out_date"] is not None

    def test_flat_can_be_let_again(self, client, auth_headers, tenanted_flat):
        client.delete(tenant_url(tenanted_flat), headers=auth_headers)

        resp = client.post(tenant_url(tenanted_flat), json={"name": "Next Tenant"}, headers=auth_headers)

        assert resp.status_code == 201
        history = client.get(f"/api/tenants/flat/{tenanted_flat['id']}", headers=auth_headers).get_json()
        assert len(history) == 2

    def test_vacant_flat(self, client, auth_headers, flat):
        resp = client.delete(tenant_url(flat), headers=auth_headers)

        assert resp.status_code == 404
        assert resp.get_json()["message"] == "No tenant found for this flat"


def test_all_tenants_across_flats(client, auth_headers, create_flat, stranger_headers):
    let = create_flat(title="Let flat")
    create_flat(title="Empty flat")
    other = create_flat(headers=stranger_headers, title="Not mine")
    client.post(f"/api/flats/{let['id']}/tenant", json=TENANT, headers=auth_headers)
    client.post(f"/api/flats/{other['id']}/tenant", json={"name": "Other"}, headers=stranger_headers)

    resp = client.get("/api/flats/tenants/all", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Tenants retrieved successfully"
    assert body["count"] == 1
    assert body["tenants"][0]["name"] == "Jane Tenant"
    assert body["tenants"][0]["flat_id"] == let["id"]
    assert body["tenants"][0]["flat_title"] == "Let flat"
