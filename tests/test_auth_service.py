from datetime import timedelta

from vacaplanner.services import auth as auth_service


def test_password_hashing():
    """Test that password hashing and verification works correctly."""
    password = "MySecurePassword123!"
    hashed = auth_service.get_password_hash(password)
    assert hashed != password
    assert auth_service.verify_password(password, hashed)
    assert not auth_service.verify_password("WrongPassword", hashed)


def test_malformed_hash_does_not_verify():
    assert not auth_service.verify_password("anything", "not-a-bcrypt-hash")


def test_access_token_round_trip():
    token = auth_service.create_access_token({"sub": "7", "role": "USER"})
    payload = auth_service.decode_access_token(token)
    assert payload["sub"] == "7"
    assert payload["type"] == "access"
    assert "vacationDaysUsed" not in payload


def test_expired_token():
    token = auth_service.create_access_token({"sub": "7"}, expires_delta=timedelta(minutes=-1))
    assert auth_service.decode_access_token(token) == {"error": "TOKEN_EXPIRED"}


def test_garbage_token():
    assert auth_service.decode_access_token("garbage") is None
