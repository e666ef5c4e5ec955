from tests.web.conftest import create_company_in_db

COMPANY_PAYLOAD = {"company_name": "Studio North", "email": "hello@studionorth.test"}


class TestCompanyRoutes:
    def test_first_company_is_primary(self, client):
        first = client.post("/api/companies", json=COMPANY_PAYLOAD).json()
        second = client.post("/api/companies", json={**COMPANY_PAYLOAD, "company_name": "Second"}).json()
        assert first["is_primary"] is True
        assert second["is_primary"] is False
        assert first["routing_code_label"] == "Routing Code"

    def test_list(self, client, test_engine):
        create_company_in_db(test_engine)
        assert len(client.get("/api/companies").json()) == 1

    def test_patch(self, client, test_engine):
        company = create_company_in_db(test_engine)
        response = client.patch(f"/api/companies/{company.uuid}", json={"routing_code": "SBIN0005943"})
        assert response.status_code == 200
        assert response.json()["routing_code_label"] == "IFSC Code"

    def test_set_primary(self, client, test_engine):
        first = create_company_in_db(test_engine)
        second = create_company_in_db(test_engine, company_name="Second", is_primary=False)
        response = client.post(f"/api/companies/{second.uuid}/primary")
        assert response.status_code == 200
        assert response.json()["is_primary"] is True
        assert client.get(f"/api/companies/{first.uuid}").json()["is_primary"] is False

    def test_delete_and_404(self, client, test_engine):
        company = create_company_in_db(test_engine)
        assert client.delete(f"/api/companies/{company.uuid}").status_code == 204
        assert client.get(f"/api/companies/{company.uuid}").status_code == 404


class TestSettingsRoutes:
    def test_missing_settings_is_404(self, client):
        response = client.get("/api/settings")
        assert response.status_code == 404
        assert "not found" in response.json()["error"]

    def test_create_then_update(self, client):
        created = client.post("/api/settings", json=COMPANY_PAYLOAD).json()
        assert created["is_primary"] is True

        updated = client.post("/api/settings", json={**COMPANY_PAYLOAD, "invoice_prefix": "SN"}).json()
        assert updated["uuid"] == created["uuid"]
        assert updated["invoice_prefix"] == "SN"
        assert client.get("/api/settings").json()["invoice_prefix"] == "SN"
        assert len(client.get("/api/companies").json()) == 1
