# routers/payments.py
"""
Customer payment API.

POST /api/payments: submit a cross-border payment request. The sender email
and account number come from the caller's own account record, never from the
request body. New payments start unverified and wait for employee review.
GET /api/payments: the caller's own payments, newest first.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from models import User
from schemas.payment import PaymentCreate, PaymentResponse
from services import NotFoundError, PaymentService

from .employee_payments import build_payment_response

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _current_account(db: Session, token: dict) -> User:
     user = db.query(User).filter(User.id == token.get("id")).first()
     if user is None:
          raise NotFoundError("Account record not found for this token.")
     return user


@router.post(
     "",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit a payment"
)
def create_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     """
     Create a payment request.

     - **receiverEmail**: receiving account holder
     - **accountInfo**: receiver's account number
     - **amount** / **currency**: non-negative amount, 3-letter currency code
     - **provider**: payment provider name
     - **swiftCode**: receiving bank's BIC (8 or 11 characters)
     """
     sender = _current_account(db, token)
     payment = PaymentService.create_payment(
          db,
          sender_email=sender.email,
          account_number=sender.account_number,
          receiver_email=body.receiver_email,
          account_info=body.account_info,
          amount=body.amount,
          currency=body.currency,
          provider=body.provider,
          swift_code=body.swift_code,
     )
     return build_payment_response(payment)


@router.get(
     "",
     response_model=List[PaymentResponse],
     summary="List my payments"
)
def list_my_payments(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     sender = _current_account(db, token)
     payments = PaymentService.list_payments(db, sender_email=sender.email)
     return [build_payment_response(p) for p in payments]
