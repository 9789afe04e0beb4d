from dataclasses import dataclass, field

from fastapi import Request

from railbook.services.booking_codes import BookingCodeGenerator
from railbook.session import SessionProvider


@dataclass
class AppContext:
    """Services shared by every request, handed to endpoints through ``get_context``."""

    sessions: SessionProvider = field(default_factory=SessionProvider)
    codes: BookingCodeGenerator = field(default_factory=BookingCodeGenerator)


def get_context(request: Request) -> AppContext:
    return request.app.state.context
