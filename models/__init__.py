from .base import Base, utcnow
from .user import User
from .payment import Payment, DEFAULT_REASON

__all__ = [
     "Base",
     "utcnow",
     "User",
     "Payment",
     "DEFAULT_REASON",
]
