# services/bulk_service.py
"""
Bulk operations over payment records.

bulk_submit walks the requested payments in order. For each one it persists
the verification and then submits; a failure is recorded against that id and
the walk moves on. Payments already processed keep their new state.

bulk_delete removes every matching record in one statement and reports how
many rows actually went away.
"""
import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Payment
from .errors import PaymentError, ValidationError
from .payment_service import PaymentService, unit_of_work
from .verification_service import VerificationService

logger = logging.getLogger(__name__)

STORE_ERROR = "Could not update payment record."


@dataclass(frozen=True)
class SubmitItem:
     """One selected payment and the check results the caller saw for it."""
     payment_id: int
     accounts_verified: bool
     swift_code_verified: bool


@dataclass(frozen=True)
class BulkItemResult:
     payment_id: int
     ok: bool
     message: str
     error: Optional[str] = None
     payment: Optional[Payment] = None


@dataclass(frozen=True)
class BulkSubmitResult:
     results: Tuple[BulkItemResult, ...] = field(default_factory=tuple)

     @property
     def submitted(self) -> int:
          return sum(1 for r in self.results if r.ok)

     @property
     def failed(self) -> int:
          return sum(1 for r in self.results if not r.ok)

     @property
     def message(self) -> str:
          if not self.failed:
               return f"Submitted {self.submitted} transaction(s)."
          return f"Submitted {self.submitted} transaction(s), {self.failed} failed."


def _submit_one(
     db: Session,
     item: SubmitItem,
     verifier: Optional[VerificationService],
) -> BulkItemResult:
     try:
          PaymentService.persist_verification(
               db,
               item.payment_id,
               item.accounts_verified,
               item.swift_code_verified,
               verifier=verifier,
          )
          payment = PaymentService.submit_to_swift(db, item.payment_id)
     except PaymentError as exc:
          logger.warning("bulk submit: payment %s failed: %s", item.payment_id, exc.message)
          return BulkItemResult(
               payment_id=item.payment_id,
               ok=False,
               message=exc.message,
               error=type(exc).__name__,
          )
     except SQLAlchemyError as exc:
          db.rollback()
          logger.error("bulk submit: payment %s store error: %s", item.payment_id, exc)
          return BulkItemResult(
               payment_id=item.payment_id,
               ok=False,
               message=STORE_ERROR,
               error=type(exc).__name__,
          )
     return BulkItemResult(
          payment_id=item.payment_id,
          ok=True,
          message=f"Submitted {item.payment_id}",
          payment=payment,
     )


def bulk_submit(
     db: Session,
     items: Sequence[SubmitItem],
     verifier: Optional[VerificationService] = None,
) -> BulkSubmitResult:
     """
     Verify and submit each item in input order.

     Raises:
          ValidationError: If ``items`` is empty.
     """
     if not items:
          raise ValidationError("No verified selections to submit.")

     result = reduce(
          lambda acc, item: BulkSubmitResult(acc.results + (_submit_one(db, item, verifier),)),
          items,
          BulkSubmitResult(),
     )
     logger.info("bulk submit finished: %d submitted, %d failed", result.submitted, result.failed)
     return result


def bulk_delete(db: Session, ids: Iterable[int]) -> int:
     """
     Delete all payments whose id is in ``ids``.

     Returns:
          Number of records deleted. Ids that did not exist are simply not
          counted.

     Raises:
          ValidationError: If ``ids`` is not a non-empty list of ids.
     """
     if not isinstance(ids, (list, tuple)) or not ids:
          raise ValidationError("Missing or invalid 'ids' array in request body.")
     if any(isinstance(i, bool) or not isinstance(i, int) for i in ids):
          raise ValidationError("Missing or invalid 'ids' array in request body.")

     unique_ids: List[int] = sorted(set(ids))
     with unit_of_work(db):
          deleted = (
               db.query(Payment)
               .filter(Payment.id.in_(unique_ids))
               .delete(synchronize_session="fetch")
          )
     logger.info("bulk delete: %d of %d requested payment(s) deleted", deleted, len(unique_ids))
     return deleted
