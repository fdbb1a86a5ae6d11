from datetime import timedelta

from jose import jwt as jose_jwt

from closer_crm.auth import Identity, can_access
from closer_crm.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from closer_crm.storage import LocalFileStore, safe_extension


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_malformed_hash_is_false():
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_token_carries_user_and_role():
    payload = decode_access_token(create_access_token(7, "CLOSER"))
    assert payload["userId"] == 7
    assert payload["role"] == "CLOSER"
    assert "exp" in payload


def test_expired_or_tampered_token_is_rejected():
    assert decode_access_token(create_access_token(7, "CLOSER", timedelta(seconds=-1))) is None
    forged = jose_jwt.encode({"userId": 7, "role": "ADMIN"}, "another-secret", algorithm="HS256")
    assert decode_access_token(forged) is None


def test_can_access():
    admin = Identity(user_id=1, role="ADMIN")
    closer = Identity(user_id=2, role="CLOSER")
    assert can_access(admin, 99)
    assert can_access(closer, 2)
    assert not can_access(closer, 3)
    assert not can_access(closer, None)


def test_safe_extension():
    assert safe_extension("receipt.PDF") == ".pdf"
    assert safe_extension("archive.tar.gz") == ".gz"
    assert safe_extension("noext") == ""
    assert safe_extension(None) == ""
    assert safe_extension("evil.p?p") == ""


def test_local_file_store_writes_under_upload_dir(tmp_path):
    store = LocalFileStore(str(tmp_path / "files"), url_prefix="/uploads/")
    url = store.save(b"data", "../../etc/passwd.png")

    assert url.startswith("/uploads/")
    name = url.rsplit("/", 1)[1]
    assert name.endswith(".png")
    assert (tmp_path / "files" / name).read_bytes() == b"data"
