import random
import string
import time
from typing import Callable, Optional

SEAT_ROWS = "ABCDEF"
SEATS_PER_ROW = 72

REFERENCE_PREFIX = "RB"
REFERENCE_SUFFIX_LENGTH = 9
_BASE36 = string.digits + string.ascii_lowercase


class BookingCodeGenerator:
    """Derives seat numbers and booking references.

    Both are random picks with no lookup against existing bookings, so two
    bookings on the same train and date can end up with the same seat. Pass a
    seeded ``random.Random`` and a fixed clock to make the output repeatable.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], float] = time.time):
        self.rng = rng or random.Random()
        self.clock = clock

    def seat_number(self) -> str:
        row = self.rng.choice(SEAT_ROWS)
        seat = self.rng.randint(1, SEATS_PER_ROW)
        return f"{row}{seat}"

    def booking_reference(self) -> str:
        millis = int(self.clock() * 1000)
        suffix = "".join(self.rng.choice(_BASE36) for _ in range(REFERENCE_SUFFIX_LENGTH))
        return f"{REFERENCE_PREFIX}{millis}{suffix.upper()}"
