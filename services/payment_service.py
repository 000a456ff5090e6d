# services/payment_service.py
"""
Payment Service - lifecycle transitions for payment records.

States: UNVERIFIED (initial) -> VERIFIED -> SUBMITTED.
VERIFIED can go back to UNVERIFIED through unverify; SUBMITTED is final.

Each transition is its own unit of work: the record update is committed on
success and rolled back on any failure, so callers never observe a partial
update. Concurrent updates to the same record are last-write-wins.
"""
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from models import Payment, utcnow
from .errors import (
     NotFoundError,
     PreconditionFailedError,
     TransientError,
     ValidationError,
)
from .swift_directory import normalize_swift_code
from .verification_service import VerificationService

logger = logging.getLogger(__name__)

PAYMENT_NOT_FOUND = "Payment record not found."
CHECKS_FAILED = "Unverified: one or more checks failed."
ALREADY_SUBMITTED = "Payment already submitted to SWIFT."
STORE_UNAVAILABLE = "Payment store is temporarily unavailable."
SUPPORTED_CURRENCIES = (
     "USD", "EUR", "GBP", "AUD", "CAD", "ZAR", "JPY",
     "CNY", "INR", "NZD", "CHF", "SGD", "HKD",
)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
     """Commit on success, roll back on any error. Store outages become TransientError."""
     try:
          yield db
          db.commit()
     except OperationalError as exc:
          db.rollback()
          logger.error("Record store unavailable: %s", exc)
          raise TransientError(STORE_UNAVAILABLE) from exc
     except Exception:
          db.rollback()
          raise


class PaymentService:
     """Service class for payment lifecycle operations."""

     @staticmethod
     def list_payments(
          db: Session,
          verified: Optional[bool] = None,
          sender_email: Optional[str] = None,
     ) -> List[Payment]:
          """Payments newest first, optionally filtered by ``verified`` and sender."""
          try:
               query = db.query(Payment)
               if verified is not None:
                    query = query.filter(Payment.verified == verified)
               if sender_email is not None:
                    query = query.filter(Payment.sender_email == sender_email)
               return query.order_by(desc(Payment.created_at), desc(Payment.id)).all()
          except OperationalError as exc:
               db.rollback()
               raise TransientError(STORE_UNAVAILABLE) from exc

     @staticmethod
     def get_payment(db: Session, payment_id: int) -> Payment:
          """
          Raises:
               NotFoundError: If no payment has this id.
          """
          try:
               payment = db.get(Payment, payment_id)
          except OperationalError as exc:
               db.rollback()
               raise TransientError(STORE_UNAVAILABLE) from exc
          if payment is None:
               raise NotFoundError(PAYMENT_NOT_FOUND)
          return payment

     @staticmethod
     def create_payment(
          db: Session,
          sender_email: str,
          account_number: str,
          receiver_email: str,
          account_info: str,
          amount: Decimal,
          currency: str,
          provider: str,
          swift_code: str,
     ) -> Payment:
          """
          Record a new payment request in the UNVERIFIED state.

          Raises:
               ValidationError: On missing fields, a negative amount or an
                    unsupported currency.
          """
          fields = {
               "senderEmail": sender_email,
               "accountNumber": account_number,
               "receiverEmail": receiver_email,
               "accountInfo": account_info,
               "provider": provider,
               "swiftCode": swift_code,
          }
          missing = [name for name, value in fields.items() if not value or not str(value).strip()]
          if missing:
               raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
          if amount is None or amount < 0:
               raise ValidationError("Amount must be a non-negative number.")
          currency = (currency or "").strip().upper()
          if currency not in SUPPORTED_CURRENCIES:
               raise ValidationError(f"Unsupported currency: {currency or 'none'}.")

          swift_code = normalize_swift_code(swift_code)
          if len(swift_code) not in (8, 11):
               raise ValidationError("SWIFT code must be 8 or 11 characters.")

          payment = Payment(
               sender_email=sender_email.strip(),
               account_number=account_number.strip(),
               receiver_email=receiver_email.strip(),
               account_info=account_info.strip(),
               amount=amount,
               currency=currency,
               provider=provider.strip(),
               swift_code=swift_code,
          )
          with unit_of_work(db):
               db.add(payment)
          db.refresh(payment)
          logger.info("payment %s created for %s %s", payment.id, payment.amount, payment.currency)
          return payment

     @staticmethod
     def persist_verification(
          db: Session,
          payment_id: int,
          accounts_verified: bool,
          swift_code_verified: bool,
          verifier: Optional[VerificationService] = None,
     ) -> Payment:
          """
          Mark a payment VERIFIED.

          The two booleans are the verdicts the caller obtained earlier from
          the verification endpoints. When ``verifier`` is given both checks
          are also re-run here against the stored payment, and the payment is
          only verified if those pass too.

          Raises:
               PreconditionFailedError: If either check failed or the payment
                    was already submitted. Nothing is written.
               NotFoundError: If the payment does not exist.
          """
          if not accounts_verified or not swift_code_verified:
               logger.warning(
                    "payment %s not verified: accounts=%s swift=%s",
                    payment_id, accounts_verified, swift_code_verified,
               )
               raise PreconditionFailedError(CHECKS_FAILED)

          with unit_of_work(db):
               payment = PaymentService.get_payment(db, payment_id)
               if payment.submitted:
                    raise PreconditionFailedError(ALREADY_SUBMITTED)
               if verifier is not None:
                    verdict = verifier.verify_payment(db, payment)
                    if not verdict.accounts.verified:
                         raise PreconditionFailedError(f"{CHECKS_FAILED} {verdict.accounts.message}")
                    if not verdict.swift.valid:
                         raise PreconditionFailedError(f"{CHECKS_FAILED} {verdict.swift.message}")
               payment.mark_verified()
          logger.info("payment %s verified", payment_id)
          return payment

     @staticmethod
     def unverify(db: Session, payment_id: int) -> Payment:
          """
          Move a payment back to UNVERIFIED. Safe to repeat.

          Raises:
               NotFoundError: If the payment does not exist.
               PreconditionFailedError: If the payment was already submitted.
          """
          with unit_of_work(db):
               payment = PaymentService.get_payment(db, payment_id)
               if payment.submitted:
                    raise PreconditionFailedError("Cannot unverify a payment already submitted to SWIFT.")
               payment.mark_unverified()
          logger.info("payment %s unverified", payment_id)
          return payment

     @staticmethod
     def submit_to_swift(db: Session, payment_id: int) -> Payment:
          """
          Hand a VERIFIED payment to the settlement network.

          Raises:
               NotFoundError: If the payment does not exist.
               PreconditionFailedError: If the payment is not verified or
                    was already submitted.
          """
          with unit_of_work(db):
               payment = PaymentService.get_payment(db, payment_id)
               if payment.submitted:
                    raise PreconditionFailedError(ALREADY_SUBMITTED)
               if not payment.verified:
                    raise PreconditionFailedError("Cannot submit unverified payment to SWIFT.")
               payment.mark_submitted(utcnow())
          logger.info("payment %s submitted to SWIFT", payment_id)
          return payment

     @staticmethod
     def delete_one(db: Session, payment_id: int) -> Payment:
          """
          Permanently delete a payment and return the removed record.

          Raises:
               NotFoundError: If the payment does not exist.
          """
          with unit_of_work(db):
               payment = PaymentService.get_payment(db, payment_id)
               db.delete(payment)
          logger.info("payment %s deleted", payment_id)
          return payment

