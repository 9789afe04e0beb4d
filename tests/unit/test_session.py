from jose import jwt

from railbook.config import settings
from railbook.context import AppContext
from railbook.main import app, lifespan
from railbook.services import auth as auth_service
from railbook.session import Session, SessionEvent, SessionProvider


def test_sign_in_issues_a_token_that_resolves_to_the_session():
    provider = SessionProvider()
    token = provider.sign_in(7, "rider@example.com")
    assert provider.current_session(token) == Session(user_id=7, email="rider@example.com")


def test_missing_or_garbage_tokens_have_no_session():
    provider = SessionProvider()
    assert provider.current_session(None) is None
    assert provider.current_session("") is None
    assert provider.current_session("not-a-jwt") is None


def test_tokens_signed_with_another_key_are_ignored():
    forged = jwt.encode({"sub": "1", "type": "access", "jti": "x", "exp": 4102444800}, "other-key", algorithm="HS256")
    assert SessionProvider().current_session(forged) is None


def test_sign_out_revokes_only_that_token():
    provider = SessionProvider()
    first = provider.sign_in(1, "a@example.com")
    second = provider.sign_in(1, "a@example.com")
    assert provider.sign_out(first) == Session(user_id=1, email="a@example.com")
    assert provider.current_session(first) is None
    assert provider.current_session(second) is not None
    # already signed out
    assert provider.sign_out(first) is None


def test_listeners_see_sign_in_and_sign_out_until_unsubscribed():
    provider = SessionProvider()
    seen = []
    unsubscribe = provider.on_change(lambda event, session: seen.append((event, session.user_id)))

    token = provider.sign_in(3, "c@example.com")
    provider.sign_out(token)
    assert seen == [(SessionEvent.SIGNED_IN, 3), (SessionEvent.SIGNED_OUT, 3)]

    unsubscribe()
    provider.sign_in(4, "d@example.com")
    assert len(seen) == 2
    # a second unsubscribe is harmless
    unsubscribe()
    assert provider.listener_count == 0


def test_password_hashes_verify():
    hashed = auth_service.hash_password("correct horse")
    assert hashed != "correct horse"
    assert auth_service.verify_password("correct horse", hashed)
    assert not auth_service.verify_password("wrong horse", hashed)


def test_access_token_claims():
    token = auth_service.create_access_token(12, "z@example.com")
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["sub"] == "12"
    assert claims["email"] == "z@example.com"
    assert claims["type"] == "access"
    assert claims["jti"]


async def test_lifespan_registers_and_removes_the_session_observer():
    previous = app.state.context
    app.state.context = AppContext()
    try:
        sessions = app.state.context.sessions
        assert sessions.listener_count == 0
        async with lifespan(app):
            assert sessions.listener_count == 1
            sessions.sign_in(1, "life@example.com")
        assert sessions.listener_count == 0
    finally:
        app.state.context = previous
