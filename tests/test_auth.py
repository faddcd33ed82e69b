from datetime import datetime, timedelta, timezone

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from fastapi import status
from jose import JWTError, jwt

from conftest import PROJECT_ID
from inventory_hub.auth import IdTokenVerifier, get_token_verifier
from inventory_hub.main import app

CERTS_URL = "https://certs.example.com/securetoken"


def generate_signing_key():
    """Return ``(private_key_pem, certificate_pem)`` for a fresh self-signed RSA key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "securetoken.example.com")])
    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    return private_pem, certificate.public_bytes(serialization.Encoding.PEM).decode()


def sign(private_pem: str, kid: str, uid: str, email: str = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "iss": f"https://securetoken.google.com/{PROJECT_ID}",
        "aud": PROJECT_ID,
        "sub": uid,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, private_pem, algorithm="RS256", headers={"kid": kid})


class CertificateMap:
    """Stands in for the provider's published certificates and counts fetches."""

    def __init__(self, certs):
        self.certs = dict(certs)
        self.fetches = 0

    def __call__(self):
        self.fetches += 1
        return dict(self.certs)


@pytest.fixture(scope="module")
def first_key():
    return generate_signing_key()


@pytest.fixture(scope="module")
def second_key():
    return generate_signing_key()


@pytest.fixture
def certificate_map(first_key):
    return CertificateMap({"key-1": first_key[1]})


@pytest.fixture
def verifier(monkeypatch, certificate_map):
    verifier = IdTokenVerifier(project_id=PROJECT_ID, certs_url=CERTS_URL)
    monkeypatch.setattr(verifier, "_fetch_keys", certificate_map)
    return verifier


def test_verifies_rs256_token_against_certificate(verifier, first_key):
    claims = verifier.verify(sign(first_key[0], "key-1", "u1", "u1@example.com"))
    assert claims.uid == "u1"
    assert claims.email == "u1@example.com"


def test_certificates_are_fetched_once(verifier, certificate_map, first_key):
    verifier.verify(sign(first_key[0], "key-1", "u1"))
    verifier.verify(sign(first_key[0], "key-1", "u2"))
    assert certificate_map.fetches == 1


def test_rotated_key_triggers_refetch(verifier, certificate_map, first_key, second_key):
    verifier.verify(sign(first_key[0], "key-1", "u1"))

    certificate_map.certs = {"key-1": first_key[1], "key-2": second_key[1]}
    claims = verifier.verify(sign(second_key[0], "key-2", "u2"))

    assert claims.uid == "u2"
    assert certificate_map.fetches == 2


def test_unknown_key_after_refetch_is_rejected(verifier, certificate_map, first_key, second_key):
    verifier.verify(sign(first_key[0], "key-1", "u1"))

    with pytest.raises(JWTError):
        verifier.verify(sign(second_key[0], "key-9", "u2"))
    assert certificate_map.fetches == 2


def test_token_signed_by_another_key_is_rejected(verifier, second_key):
    with pytest.raises(JWTError):
        verifier.verify(sign(second_key[0], "key-1", "u1"))


def test_fetch_keys_reads_certificate_map_over_http(monkeypatch, first_key):
    requested = []

    def fake_get(url, timeout):
        requested.append(url)
        return httpx.Response(200, json={"key-1": first_key[1]}, request=httpx.Request("GET", url))

    monkeypatch.setattr(httpx, "get", fake_get)
    verifier = IdTokenVerifier(project_id=PROJECT_ID, certs_url=CERTS_URL)

    assert verifier.verify(sign(first_key[0], "key-1", "u1")).uid == "u1"
    assert requested == [CERTS_URL]


def test_api_rejects_unknown_key_and_accepts_known_one(client, verifier, first_key, second_key):
    app.dependency_overrides[get_token_verifier] = lambda: verifier

    unknown = sign(second_key[0], "key-9", "rs-uid", "rs@example.com")
    response = client.get("/api/inventories", headers={"Authorization": f"Bearer {unknown}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Invalid token"}

    known = sign(first_key[0], "key-1", "rs-uid", "rs@example.com")
    response = client.get("/api/inventories", headers={"Authorization": f"Bearer {known}"})
    assert response.status_code == status.HTTP_200_OK
