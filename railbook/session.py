"""Session provider: who is signed in, and notifications when that changes."""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from jose import JWTError

from railbook.services import auth as auth_service


class SessionEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class Session:
    user_id: int
    email: str


Listener = Callable[[SessionEvent, Session], None]


class SessionProvider:
    """Resolves bearer tokens to sessions.

    Signing out deny-lists the token id until the token would have expired
    anyway. Listeners registered with ``on_change`` are called synchronously
    on every sign in and sign out.
    """

    def __init__(self):
        self._listeners: List[Listener] = []
        self._revoked: Dict[str, int] = {}

    def on_change(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, event: SessionEvent, session: Session):
        for listener in list(self._listeners):
            listener(event, session)

    def _claims(self, token: Optional[str]) -> Optional[dict]:
        if not token:
            return None
        try:
            claims = auth_service.decode_access_token(token)
        except JWTError:
            return None
        if claims["jti"] in self._revoked:
            return None
        return claims

    def current_session(self, token: Optional[str]) -> Optional[Session]:
        claims = self._claims(token)
        if claims is None:
            return None
        return Session(user_id=int(claims["sub"]), email=claims.get("email") or "")

    def sign_in(self, user_id: int, email: str) -> str:
        token = auth_service.create_access_token(user_id, email)
        self._notify(SessionEvent.SIGNED_IN, Session(user_id=user_id, email=email))
        return token

    def sign_out(self, token: Optional[str]) -> Optional[Session]:
        claims = self._claims(token)
        if claims is None:
            return None
        self._prune()
        self._revoked[claims["jti"]] = int(claims["exp"])
        session = Session(user_id=int(claims["sub"]), email=claims.get("email") or "")
        self._notify(SessionEvent.SIGNED_OUT, session)
        return session

    def _prune(self):
        now = int(time.time())
        for jti in [j for j, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]
