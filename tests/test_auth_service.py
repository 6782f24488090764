from types import SimpleNamespace

import pytest
from supabase import AuthError as SupabaseAuthError

import config
from services import auth_service
from services.auth_service import AuthError, sign_in, sign_out


class RefusedError(SupabaseAuthError):
    def __init__(self, message, status):
        Exception.__init__(self, message)
        self.message = message
        self.status = status


def _signed_in(user_id="uuid-1", email="planner@example.com", token="tok-1"):
    return SimpleNamespace(user=SimpleNamespace(id=user_id, email=email),
                           session=SimpleNamespace(access_token=token))


@pytest.fixture
def supabase(monkeypatch):
    """Configure auth and stand in for the supabase client."""
    monkeypatch.setattr(config, "SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_ANON_KEY", "anon-key")
    stub = SimpleNamespace(clients=[], credentials=[], revoked=[], replies=[])

    def answer(record, value):
        record.append(value)
        reply = stub.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def fake_create_client(url, key):
        stub.clients.append((url, key))
        admin = SimpleNamespace(sign_out=lambda jwt: answer(stub.revoked, jwt))
        auth = SimpleNamespace(
            sign_in_with_password=lambda creds: answer(stub.credentials, creds),
            admin=admin)
        return SimpleNamespace(auth=auth)

    monkeypatch.setattr(auth_service, "create_client", fake_create_client)
    return stub


def test_auth_is_off_without_configuration():
    assert auth_service.auth_enabled() is False
    with pytest.raises(AuthError, match="SUPABASE_URL"):
        sign_in("a@example.com", "pw")


def test_sign_in_success(supabase):
    supabase.replies.append(_signed_in())
    user = sign_in("planner@example.com", "secret")
    assert user.to_session() == {"id": "uuid-1", "email": "planner@example.com",
                                 "access_token": "tok-1"}
    assert supabase.clients == [("https://demo.supabase.co", "anon-key")]
    assert supabase.credentials == [{"email": "planner@example.com", "password": "secret"}]


@pytest.mark.parametrize("error, message", [
    (RefusedError("Invalid login credentials", 400), "Invalid login credentials"),
    (RefusedError("Email not confirmed", 400), "Email not confirmed"),
    (RefusedError("", 500), auth_service.LOGIN_FAILED),
    (RefusedError("Connection refused", 0), auth_service.LOGIN_FAILED),
])
def test_sign_in_rejected(supabase, error, message):
    supabase.replies.append(error)
    with pytest.raises(AuthError) as info:
        sign_in("planner@example.com", "wrong")
    assert str(info.value) == message


def test_sign_in_without_a_session(supabase):
    supabase.replies.append(SimpleNamespace(user=None, session=None))
    with pytest.raises(AuthError, match=auth_service.LOGIN_FAILED):
        sign_in("planner@example.com", "secret")


def test_sign_out_revokes_token_and_tolerates_failures(supabase, caplog):
    supabase.replies.append(None)
    sign_out("tok-1")
    assert supabase.revoked == ["tok-1"]

    supabase.replies.append(RefusedError("timed out", 0))
    sign_out("tok-1")
    assert "Sign-out request failed" in caplog.text

    sign_out(None)
    assert len(supabase.revoked) == 2
