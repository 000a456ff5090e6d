# routers/employee_payments.py
"""
Employee payment review API.

Employees list incoming payments, check sender/receiver accounts and the
SWIFT code, mark payments verified and submit them to SWIFT, singly or in
bulk. Every route requires a token with role=employee.

Service errors (not found, failed preconditions, store outages) are turned
into HTTP responses by the handler registered in main.py.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_verification_service, require_role, revalidate_on_persist
from models import Payment
from schemas.payment import (
     AccountVerificationRequest,
     AccountVerificationResponse,
     BulkDeleteRequest,
     BulkDeleteResponse,
     BulkItemResponse,
     BulkSubmitRequest,
     BulkSubmitResponse,
     DeletePaymentRequest,
     PaymentActionResponse,
     PaymentChecksResponse,
     PaymentIdRequest,
     PaymentResponse,
     SwiftVerificationRequest,
     SwiftVerificationResponse,
     UpdateVerificationRequest,
)
from services import (
     FailureKind,
     PaymentService,
     PreconditionFailedError,
     SubmitItem,
     ValidationError,
     VerificationService,
     bulk_delete,
     bulk_submit,
)

router = APIRouter(
     prefix="/api/employeepayments",
     tags=["employee payments"],
     dependencies=[Depends(require_role("employee"))],
)

_FAILURE_STATUS = {
     FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
     FailureKind.MISMATCH: status.HTTP_400_BAD_REQUEST,
}


def build_payment_response(payment: Payment) -> PaymentResponse:
     return PaymentResponse(
          id=payment.id,
          sender_email=payment.sender_email,
          receiver_email=payment.receiver_email,
          account_number=payment.account_number,
          account_info=payment.account_info,
          provider=payment.provider,
          swift_code=payment.swift_code,
          amount=payment.amount,
          currency=payment.currency,
          verified=payment.verified,
          reason=payment.reason,
          submitted=payment.submitted,
          swift_response=payment.swift_response,
          created_at=payment.created_at,
          payment_date=payment.created_at,
          status=payment.status,
     )


@router.get(
     "/getall",
     response_model=List[PaymentResponse],
     summary="List payments, newest first"
)
def list_payments(
     verified: Optional[bool] = Query(None, description="Filter by verification status"),
     db: Session = Depends(get_session),
):
     payments = PaymentService.list_payments(db, verified=verified)
     return [build_payment_response(p) for p in payments]


@router.post(
     "/verify-account",
     response_model=AccountVerificationResponse,
     summary="Check sender and receiver account numbers"
)
def verify_account(
     body: AccountVerificationRequest,
     db: Session = Depends(get_session),
     verifier: VerificationService = Depends(get_verification_service),
):
     """
     Checks, in order, stopping at the first failure:

     1. Sender email exists (404 if not)
     2. Sender account number matches (400 if not)
     3. Receiver email exists (404 if not)
     4. Receiver account number matches (400 if not)

     Failures still return ``{verified: false, message}``.
     """
     verdict = verifier.check_account_match(
          db,
          account_number=body.account_number,
          sender_email=body.sender_email,
          account_info=body.account_info,
          receiver_email=body.receiver_email,
     )
     result = AccountVerificationResponse(verified=verdict.verified, message=verdict.message)
     if verdict.failure is not None:
          return JSONResponse(status_code=_FAILURE_STATUS[verdict.failure], content=result.model_dump())
     return result


@router.post(
     "/verify-swift",
     response_model=SwiftVerificationResponse,
     summary="Check a SWIFT/BIC code against the reference dataset"
)
def verify_swift(
     body: SwiftVerificationRequest,
     verifier: VerificationService = Depends(get_verification_service),
):
     try:
          verdict = verifier.check_swift(body.swift_code)
     except ValidationError as exc:
          return JSONResponse(
               status_code=status.HTTP_400_BAD_REQUEST,
               content={"valid": False, "message": exc.message},
          )
     result = SwiftVerificationResponse(valid=verdict.valid, message=verdict.message)
     if verdict.failure is not None:
          return JSONResponse(status_code=_FAILURE_STATUS[verdict.failure], content=result.model_dump())
     return result


@router.patch(
     "/update-verification",
     response_model=PaymentActionResponse,
     summary="Persist a verification verdict"
)
def update_verification(
     body: UpdateVerificationRequest,
     db: Session = Depends(get_session),
     verifier: VerificationService = Depends(get_verification_service),
     revalidate: bool = Depends(revalidate_on_persist),
):
     """
     Mark the payment verified when both ``accountsVerified`` and
     ``swiftCodeVerified`` are true. Otherwise nothing changes and the
     response is 400 ``{verified: false, message}``.
     """
     try:
          payment = PaymentService.persist_verification(
               db,
               body.id,
               body.accounts_verified,
               body.swift_code_verified,
               verifier=verifier if revalidate else None,
          )
     except PreconditionFailedError as exc:
          return JSONResponse(
               status_code=status.HTTP_400_BAD_REQUEST,
               content={"verified": False, "message": exc.message},
          )
     return PaymentActionResponse(
          message="Payment verification status updated successfully.",
          payment=build_payment_response(payment),
     )


@router.patch(
     "/unverify",
     response_model=PaymentActionResponse,
     summary="Move a payment back to unverified"
)
def unverify_payment(body: PaymentIdRequest, db: Session = Depends(get_session)):
     payment = PaymentService.unverify(db, body.id)
     return PaymentActionResponse(
          message="Payment unverified successfully.",
          payment=build_payment_response(payment),
     )


@router.patch(
     "/submit-to-swift",
     response_model=PaymentActionResponse,
     summary="Submit a verified payment to SWIFT"
)
def submit_to_swift(body: PaymentIdRequest, db: Session = Depends(get_session)):
     payment = PaymentService.submit_to_swift(db, body.id)
     return PaymentActionResponse(
          message="Payment successfully submitted to SWIFT.",
          payment=build_payment_response(payment),
     )


@router.post(
     "/submit-multiple",
     response_model=BulkSubmitResponse,
     summary="Verify and submit several payments"
)
def submit_multiple(
     body: BulkSubmitRequest,
     db: Session = Depends(get_session),
     verifier: VerificationService = Depends(get_verification_service),
     revalidate: bool = Depends(revalidate_on_persist),
):
     """
     Each item is verified and submitted in order. One failing item does not
     stop or undo the others; per-item outcomes are listed in ``results``.
     """
     items = [SubmitItem(i.id, i.accounts_verified, i.swift_code_verified) for i in body.items]
     outcome = bulk_submit(db, items, verifier=verifier if revalidate else None)
     return BulkSubmitResponse(
          message=outcome.message,
          submitted=outcome.submitted,
          failed=outcome.failed,
          results=[
               BulkItemResponse(
                    id=r.payment_id,
                    ok=r.ok,
                    message=r.message,
                    error=r.error,
                    payment=build_payment_response(r.payment) if r.payment is not None else None,
               )
               for r in outcome.results
          ],
     )


@router.delete(
     "/delete",
     response_model=PaymentActionResponse,
     summary="Delete one payment"
)
def delete_payment(
     query_id: Optional[int] = Query(None, alias="id", description="Payment id, if not given in the body"),
     body: Optional[DeletePaymentRequest] = Body(None),
     db: Session = Depends(get_session),
):
     """Accepts ``{_id}`` in the body or ``?id=`` in the query string."""
     payment_id = body.id if body is not None and body.id is not None else query_id
     if payment_id is None:
          raise ValidationError("Missing _id (or id query) in request.")
     payment = PaymentService.delete_one(db, payment_id)
     return PaymentActionResponse(
          message="Payment deleted successfully.",
          payment=build_payment_response(payment),
     )


@router.post(
     "/delete-multiple",
     response_model=BulkDeleteResponse,
     summary="Delete several payments"
)
def delete_multiple(body: BulkDeleteRequest, db: Session = Depends(get_session)):
     """
     Deletes every listed payment that exists. ``deletedCount`` may be lower
     than the number of ids sent when some were already gone.
     """
     deleted = bulk_delete(db, body.ids)
     return BulkDeleteResponse(message=f"Deleted {deleted} record(s).", deleted_count=deleted)


@router.get(
     "/{payment_id}",
     response_model=PaymentResponse,
     summary="Get one payment"
)
def get_payment(payment_id: int, db: Session = Depends(get_session)):
     return build_payment_response(PaymentService.get_payment(db, payment_id))


@router.get(
     "/{payment_id}/checks",
     response_model=PaymentChecksResponse,
     summary="Run both checks for a stored payment"
)
def get_payment_checks(
     payment_id: int,
     db: Session = Depends(get_session),
     verifier: VerificationService = Depends(get_verification_service),
):
     payment = PaymentService.get_payment(db, payment_id)
     verdict = verifier.verify_payment(db, payment)
     return PaymentChecksResponse(
          payment_id=payment.id,
          accounts_verified=verdict.accounts.verified,
          accounts_message=verdict.accounts.message,
          swift_code_verified=verdict.swift.valid,
          swift_message=verdict.swift.message,
     )
