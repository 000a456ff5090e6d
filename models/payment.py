# models/payment.py
"""
Payment model - cross-border payment requests awaiting employee review.

State flags move only through services.payment_service:
unverified -> verified -> submitted, with verified -> unverified on request.
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, JSON, CheckConstraint, func
from .base import Base, utcnow

DEFAULT_REASON = "Pending verification"


class Payment(Base):
     """
     A payment record. ``submitted`` implies ``verified``, and
     ``swift_response`` is only set once the record is submitted.
     """
     __table_args__ = (
          CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Parties
     sender_email = Column(String(255), nullable=False, index=True)
     receiver_email = Column(String(255), nullable=False, index=True)
     account_number = Column(String(34), nullable=False)  # claimed sender account
     account_info = Column(String(34), nullable=False)  # claimed receiver account
     provider = Column(String(100), nullable=False)
     swift_code = Column(String(11), nullable=False)

     # Financial
     amount = Column(Numeric(14, 2), nullable=False)
     currency = Column(String(3), nullable=False)

     # Verification state
     verified = Column(Boolean, default=False, nullable=False, index=True)
     reason = Column(String(255), default=DEFAULT_REASON, nullable=False)
     submitted = Column(Boolean, default=False, nullable=False)
     swift_response = Column(JSON, nullable=True)

     # Timestamps
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False, index=True)

     def __repr__(self):
          return (
               f"<Payment(id={self.id}, amount={self.amount} {self.currency}, "
               f"verified={self.verified}, submitted={self.submitted})>"
          )

     @property
     def status(self) -> str:
          """Lifecycle state derived from the flags."""
          if self.submitted:
               return "SUBMITTED"
          if self.verified:
               return "VERIFIED"
          return "UNVERIFIED"

     def mark_verified(self) -> None:
          self.verified = True
          self.reason = "Verified successfully"

     def mark_unverified(self) -> None:
          self.verified = False
          self.reason = "Unverified by employee"

     def mark_submitted(self, timestamp) -> None:
          """Record hand-off to the settlement network."""
          self.submitted = True
          self.reason = "Submitted to SWIFT successfully."
          self.swift_response = {"status": "submitted", "timestamp": timestamp.isoformat()}
