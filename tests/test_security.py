"""
Password hashing, token issuance and the authentication gate.
"""

import threading
from datetime import timedelta

import jwt
import pytest

from conftest import TEST_PASSWORD, TEST_SECRET, make_doctor
from doctorconnect.application.dto.auth_dto import LoginRequest
from doctorconnect.application.use_cases.login_doctor import LoginDoctorUseCase
from doctorconnect.core.auth import AuthService, require_admin
from doctorconnect.core.security import PasswordHasher, TokenService
from doctorconnect.core.utils.datetime_utils import utc_now
from doctorconnect.domain.enums import DoctorRole
from doctorconnect.domain.errors import (
    AuthorizationError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)


def test_hash_and_verify(hasher):
    hashed = hasher.hash(TEST_PASSWORD)
    assert hashed != TEST_PASSWORD
    assert hasher.verify(TEST_PASSWORD, hashed)
    assert not hasher.verify("wrong-password", hashed)


def test_verify_against_garbage_hash(hasher):
    assert hasher.verify(TEST_PASSWORD, "not-a-bcrypt-hash") is False


def test_dummy_verify_never_succeeds(hasher):
    assert hasher.verify_dummy(TEST_PASSWORD) is False


def test_token_claims(tokens):
    doctor = make_doctor()
    doctor.id = "abc123"
    payload = tokens.decode(tokens.create(doctor))
    assert payload["sub"] == "abc123"
    assert payload["email"] == "doc@example.com"
    assert payload["role"] == "doctor"
    assert payload["exp"] - payload["iat"] == 3600


def test_expired_token(tokens):
    doctor = make_doctor()
    doctor.id = "abc123"
    token = tokens.create(doctor, now=utc_now() - timedelta(days=2))
    with pytest.raises(ExpiredTokenError):
        tokens.decode(token)


def test_token_signed_with_other_key(tokens):
    doctor = make_doctor()
    doctor.id = "abc123"
    forged = TokenService("another-secret-key-of-sufficient-length").create(doctor)
    with pytest.raises(InvalidTokenError):
        tokens.decode(forged)


def test_token_without_subject():
    token = jwt.encode({"exp": utc_now() + timedelta(hours=1)}, TEST_SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        TokenService(TEST_SECRET).decode(token)


class TestAuthService:
    @pytest.mark.asyncio
    async def test_missing_token(self, tokens, doctors):
        with pytest.raises(MissingTokenError):
            await AuthService(tokens, doctors).authenticate(None)
        with pytest.raises(MissingTokenError):
            await AuthService(tokens, doctors).authenticate("   ")

    @pytest.mark.asyncio
    async def test_resolves_doctor_without_password(self, tokens, doctors, doctor):
        resolved = await AuthService(tokens, doctors).authenticate(tokens.create(doctor))
        assert resolved.id == doctor.id
        assert resolved.password_hash is None
        assert doctors.items[doctor.id].password_hash is not None

    @pytest.mark.asyncio
    async def test_deleted_doctor(self, tokens, doctors):
        ghost = make_doctor()
        ghost.id = "ffffffffffffffffffffffff"
        with pytest.raises(InvalidTokenError) as exc_info:
            await AuthService(tokens, doctors).authenticate(tokens.create(ghost))
        assert exc_info.value.http_status == 401


def test_require_admin():
    admin = make_doctor(role=DoctorRole.ADMIN)
    assert require_admin(admin) is admin
    with pytest.raises(AuthorizationError):
        require_admin(make_doctor())


class ThreadRecordingHasher(PasswordHasher):
    def __init__(self):
        super().__init__(rounds=4)
        self.threads = []

    def verify(self, password, password_hash):
        self.threads.append(threading.get_ident())
        return super().verify(password, password_hash)

    def verify_dummy(self, password):
        self.threads.append(threading.get_ident())
        return super().verify_dummy(password)


class TestLoginHashing:
    @pytest.mark.asyncio
    async def test_bcrypt_runs_off_the_event_loop(self, doctors, tokens, doctor):
        hasher = ThreadRecordingHasher()
        login = LoginDoctorUseCase(doctors, hasher, tokens)

        with pytest.raises(InvalidCredentialsError):
            await login.execute(LoginRequest(email=doctor.email, password="wrong-password"))
        with pytest.raises(InvalidCredentialsError):
            await login.execute(LoginRequest(email="nobody@example.com", password=TEST_PASSWORD))

        assert len(hasher.threads) == 2
        assert threading.get_ident() not in hasher.threads
