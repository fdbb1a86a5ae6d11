import io

import pytest
from conftest import auth_header, create_client_record
from fastapi import UploadFile

from closer_crm.auth import Identity
from closer_crm.domain.payments.service import PaymentProofService
from closer_crm.errors import Forbidden


def upload(client, token, client_id, content=b"\x89PNG fake image", filename="receipt.png", path="clients"):
    if path == "clients":
        url = f"/api/clients/{client_id}/payment-proof"
    else:
        url = f"/api/payments/{client_id}"
    return client.post(url, files={"file": (filename, content, "image/png")}, headers=auth_header(token))


def test_upload_list_delete_round(client, closer_a):
    headers = auth_header(closer_a["token"])
    client_id = create_client_record(client, closer_a["token"])

    response = upload(client, closer_a["token"], client_id)
    assert response.status_code == 201
    created = response.json()
    assert created["fileUrl"].startswith("/uploads/")
    assert created["fileUrl"].endswith(".png")

    proofs = client.get(f"/api/clients/{client_id}/payment-proofs", headers=headers).json()
    assert len(proofs) == 1
    assert proofs[0]["proofId"] == created["proofId"]
    assert proofs[0]["fileUrl"] == created["fileUrl"]

    response = client.delete(
        f"/api/clients/{client_id}/payment-proofs/{created['proofId']}", headers=headers
    )
    assert response.status_code == 200
    assert client.get(f"/api/clients/{client_id}/payment-proofs", headers=headers).json() == []


def test_uploaded_file_is_served(client, closer_a):
    client_id = create_client_record(client, closer_a["token"])
    file_url = upload(client, closer_a["token"], client_id, content=b"receipt-bytes").json()["fileUrl"]

    response = client.get(file_url)
    assert response.status_code == 200
    assert response.content == b"receipt-bytes"


def test_upload_without_file_is_invalid(client, closer_a):
    client_id = create_client_record(client, closer_a["token"])
    response = client.post(
        f"/api/clients/{client_id}/payment-proof", headers=auth_header(closer_a["token"])
    )
    assert response.status_code == 400


def test_upload_empty_file_is_invalid(client, closer_a):
    client_id = create_client_record(client, closer_a["token"])
    assert upload(client, closer_a["token"], client_id, content=b"").status_code == 400


def test_other_closer_cannot_touch_proofs(client, closer_a, closer_b):
    client_id = create_client_record(client, closer_a["token"])
    proof_id = upload(client, closer_a["token"], client_id).json()["proofId"]
    other = auth_header(closer_b["token"])

    assert upload(client, closer_b["token"], client_id).status_code == 403
    assert client.get(f"/api/clients/{client_id}/payment-proofs", headers=other).status_code == 403
    response = client.delete(f"/api/clients/{client_id}/payment-proofs/{proof_id}", headers=other)
    assert response.status_code == 403


def test_admin_can_manage_any_clients_proofs(client, admin_token, closer_a):
    client_id = create_client_record(client, closer_a["token"])
    assert upload(client, admin_token, client_id).status_code == 201
    proofs = client.get(f"/api/clients/{client_id}/payment-proofs", headers=auth_header(admin_token)).json()
    assert len(proofs) == 1


def test_upload_to_missing_client_is_not_found(client, closer_a):
    assert upload(client, closer_a["token"], 9999).status_code == 404


def test_proof_can_only_be_deleted_through_its_own_client(client, closer_a):
    headers = auth_header(closer_a["token"])
    first = create_client_record(client, closer_a["token"], name="First")
    second = create_client_record(client, closer_a["token"], name="Second")
    proof_id = upload(client, closer_a["token"], first).json()["proofId"]

    response = client.delete(f"/api/clients/{second}/payment-proofs/{proof_id}", headers=headers)
    assert response.status_code == 404
    assert len(client.get(f"/api/clients/{first}/payment-proofs", headers=headers).json()) == 1


def test_payments_routes(client, closer_a):
    headers = auth_header(closer_a["token"])
    client_id = create_client_record(client, closer_a["token"])

    first = upload(client, closer_a["token"], client_id, path="payments").json()["proofId"]
    second = upload(client, closer_a["token"], client_id, filename="second.pdf", path="payments").json()["proofId"]

    proofs = client.get(f"/api/payments/{client_id}", headers=headers).json()
    assert [p["proofId"] for p in proofs] == [second, first]

    assert client.delete(f"/api/payments/{client_id}/{first}", headers=headers).status_code == 200
    assert [p["proofId"] for p in client.get(f"/api/payments/{client_id}", headers=headers).json()] == [second]


def test_client_detail_lists_proofs_newest_first(client, closer_a):
    client_id = create_client_record(client, closer_a["token"])
    first = upload(client, closer_a["token"], client_id).json()["proofId"]
    second = upload(client, closer_a["token"], client_id).json()["proofId"]

    detail = client.get(f"/api/clients/{client_id}", headers=auth_header(closer_a["token"])).json()
    assert [p["proofId"] for p in detail["paymentProofs"]] == [second, first]


def test_non_owner_upload_is_rejected_before_reading(client, db_session, file_store, closer_a, closer_b):
    client_id = create_client_record(client, closer_a["token"])
    upload_file = UploadFile(file=io.BytesIO(b"receipt-bytes"), filename="receipt.png")
    service = PaymentProofService(db_session, file_store)

    with pytest.raises(Forbidden):
        service.upload(client_id, Identity(user_id=closer_b["id"], role="CLOSER"), upload_file)
    assert upload_file.file.tell() == 0


def test_oversized_upload_is_invalid(client, closer_a, monkeypatch):
    monkeypatch.setattr("closer_crm.domain.payments.service.MAX_UPLOAD_BYTES", 8)
    client_id = create_client_record(client, closer_a["token"])

    assert upload(client, closer_a["token"], client_id, content=b"12345678").status_code == 201
    assert upload(client, closer_a["token"], client_id, content=b"123456789").status_code == 400
