import re

from conftest import CLOSER_PASSWORD, auth_header, login, register_closer


def test_ping_reports_date_and_environment(client):
    response = client.get("/ping")
    assert response.status_code == 200
    body = response.json()
    assert re.search(r"\d{4}-\d{2}-\d{2}", body["message"])
    assert body["env"] == "test"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_new_closer_end_to_end(client, admin_token):
    register_closer(client, admin_token, "rookie@example.com", "Rookie", objective=1000)
    token = login(client, "rookie@example.com", CLOSER_PASSWORD)
    headers = auth_header(token)

    created = client.post(
        "/api/clients", json={"name": "Acme Buyer", "email": "buyer@acme.com"}, headers=headers
    )
    assert created.status_code == 201
    client_id = created.json()["clientId"]

    detail = client.get(f"/api/clients/{client_id}", headers=headers).json()
    assert detail["status"] == "PAGO_PENDIENTE"
    assert detail["paymentProofs"] == []
    assert detail["meetings"] == []

    client.post("/api/users/achievement", json={"amount": 125}, headers=headers)
    profile = client.get("/api/users/profile", headers=headers).json()
    assert profile["objective"] == 1000
    assert profile["percentComplete"] == 12.5
