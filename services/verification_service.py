# services/verification_service.py
"""
Verification Service - account and SWIFT checks for payment review.

Two independent checks:
1. Account match: sender and receiver emails resolve to account records whose
   account numbers equal the numbers claimed on the payment.
2. SWIFT match: the payment's BIC is present in the reference directory.

Neither check writes anything. The account check is ordered (sender before
receiver) and stops at the first failure, so the message returned always
names exactly one problem.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from models import Payment, User
from .errors import FailureKind, ValidationError
from .swift_directory import SwiftDirectory


@dataclass(frozen=True)
class AccountVerdict:
     verified: bool
     message: str
     failure: Optional[FailureKind] = None


@dataclass(frozen=True)
class SwiftVerdict:
     valid: bool
     message: str
     failure: Optional[FailureKind] = None


@dataclass(frozen=True)
class PaymentVerdict:
     """Both check results for one stored payment."""
     accounts: AccountVerdict
     swift: SwiftVerdict

     @property
     def passed(self) -> bool:
          return self.accounts.verified and self.swift.valid


def _require(value: Optional[str]) -> bool:
     return isinstance(value, str) and bool(value.strip())


class VerificationService:
     """Runs verification checks against the account store and a SWIFT directory."""

     def __init__(self, directory: SwiftDirectory):
          self.directory = directory

     @staticmethod
     def _account_number_for(db: Session, email: str) -> Optional[str]:
          row = db.query(User.account_number).filter(User.email == email.strip()).first()
          return row[0] if row else None

     def check_account_match(
          self,
          db: Session,
          account_number: str,
          sender_email: str,
          account_info: str,
          receiver_email: str,
     ) -> AccountVerdict:
          """
          Compare the claimed sender/receiver account numbers with stored records.

          Raises:
               ValidationError: If any of the four fields is missing or blank.
          """
          if not all(_require(v) for v in (account_number, sender_email, account_info, receiver_email)):
               raise ValidationError(
                    "Missing required fields. Please provide accountNumber, senderEmail, "
                    "receiverEmail, and accountInfo."
               )

          sender_account = self._account_number_for(db, sender_email)
          if sender_account is None:
               return AccountVerdict(False, "Sender email not found in system.", FailureKind.NOT_FOUND)
          if sender_account != account_number.strip():
               return AccountVerdict(
                    False,
                    "Sender account number does not match the provided email.",
                    FailureKind.MISMATCH,
               )

          receiver_account = self._account_number_for(db, receiver_email)
          if receiver_account is None:
               return AccountVerdict(False, "Receiver email not found in system.", FailureKind.NOT_FOUND)
          if receiver_account != account_info.strip():
               return AccountVerdict(
                    False,
                    "Receiver account number does not match records.",
                    FailureKind.MISMATCH,
               )

          return AccountVerdict(True, "Both sender and receiver verified successfully.")

     def check_swift(self, code: str) -> SwiftVerdict:
          """
          Look up a SWIFT/BIC code.

          Raises:
               ValidationError: If the code is missing or blank.
          """
          if self.directory.is_valid(code):
               return SwiftVerdict(True, "SWIFT code is valid.")
          return SwiftVerdict(False, "SWIFT code not valid or not found.", FailureKind.NOT_FOUND)

     def verify_payment(self, db: Session, payment: Payment) -> PaymentVerdict:
          """Run both checks on a stored payment's own fields."""
          accounts = self.check_account_match(
               db,
               account_number=payment.account_number,
               sender_email=payment.sender_email,
               account_info=payment.account_info,
               receiver_email=payment.receiver_email,
          )
          swift = self.check_swift(payment.swift_code)
          return PaymentVerdict(accounts=accounts, swift=swift)
