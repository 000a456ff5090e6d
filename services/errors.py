# services/errors.py
"""
Error taxonomy for payment review operations.

Services raise these; the API layer maps them to HTTP responses in one
place (see main.py). Every error carries a human-readable message that is
shown to the employee as-is.
"""
import enum


class FailureKind(str, enum.Enum):
     """
     Why a verification check did not pass.

     Mismatches are never raised; they travel inside the check verdicts so
     the caller always gets a verdict body back.
     """
     NOT_FOUND = "NOT_FOUND"
     MISMATCH = "MISMATCH"


class PaymentError(Exception):
     """Base class for all expected payment review failures."""
     status_code = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class ValidationError(PaymentError):
     """Missing or malformed request fields. Raised before any store access."""
     status_code = 400


class NotFoundError(PaymentError):
     """Referenced payment or account record is absent."""
     status_code = 404


class PreconditionFailedError(PaymentError):
     """Transition attempted from a state that does not allow it."""
     status_code = 400


class TransientError(PaymentError):
     """Record store unavailable. Not retried here."""
     status_code = 503
