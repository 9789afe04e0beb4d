from .models import *

__all__ = [
    "Base",
    "User",
    "Train",
    "Booking",
]
