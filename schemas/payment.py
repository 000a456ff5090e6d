"""
Pydantic schemas for the payment review API.

Field names on the wire are camelCase (``senderEmail``, ``swiftResponse``)
and payment ids in request bodies are sent as ``_id``.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict, StrictBool, StrictInt


class SwiftResponse(BaseModel):
     """Settlement network acknowledgement stored on submission."""
     status: str
     timestamp: datetime


class PaymentResponse(BaseModel):
     """Schema for a payment record."""
     id: int
     sender_email: str = Field(..., alias="senderEmail")
     receiver_email: str = Field(..., alias="receiverEmail")
     account_number: str = Field(..., alias="accountNumber")
     account_info: str = Field(..., alias="accountInfo")
     provider: str
     swift_code: str = Field(..., alias="swiftCode")
     amount: Decimal
     currency: str
     verified: bool
     reason: str
     submitted: bool
     swift_response: Optional[SwiftResponse] = Field(None, alias="swiftResponse")
     created_at: datetime = Field(..., alias="createdAt")
     payment_date: datetime = Field(..., alias="paymentDate")
     status: str = Field(..., description="UNVERIFIED, VERIFIED or SUBMITTED")

     model_config = ConfigDict(
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "id": 12,
                    "senderEmail": "alice@example.com",
                    "receiverEmail": "bob@example.com",
                    "accountNumber": "1234567890",
                    "accountInfo": "7410852096",
                    "provider": "SWIFT",
                    "swiftCode": "ABSAZAJJ",
                    "amount": "250.00",
                    "currency": "USD",
                    "verified": True,
                    "reason": "Submitted to SWIFT successfully.",
                    "submitted": True,
                    "swiftResponse": {"status": "submitted", "timestamp": "2026-10-19T09:12:44"},
                    "createdAt": "2026-10-19T08:55:01",
                    "paymentDate": "2026-10-19T08:55:01",
                    "status": "SUBMITTED",
               }
          }
     )


class PaymentActionResponse(BaseModel):
     """Response for single-record transitions."""
     message: str
     payment: PaymentResponse


class PaymentCreate(BaseModel):
     """Schema for a customer submitting a new payment."""
     receiver_email: str = Field(..., alias="receiverEmail", min_length=3, max_length=255)
     amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
     currency: str = Field(..., min_length=3, max_length=3)
     provider: str = Field(..., min_length=1, max_length=100)
     account_info: str = Field(..., alias="accountInfo", min_length=1, max_length=34)
     swift_code: str = Field(..., alias="swiftCode", min_length=1, max_length=20)

     model_config = ConfigDict(
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "receiverEmail": "bob@example.com",
                    "amount": 250.00,
                    "currency": "USD",
                    "provider": "SWIFT",
                    "accountInfo": "7410852096",
                    "swiftCode": "ABSAZAJJ",
               }
          },
     )


class AccountVerificationRequest(BaseModel):
     """Body for POST /verify-account. Presence is checked by the service."""
     account_number: Optional[str] = Field(None, alias="accountNumber")
     sender_email: Optional[str] = Field(None, alias="senderEmail")
     account_info: Optional[str] = Field(None, alias="accountInfo")
     receiver_email: Optional[str] = Field(None, alias="receiverEmail")

     model_config = ConfigDict(populate_by_name=True)


class AccountVerificationResponse(BaseModel):
     verified: bool
     message: str


class SwiftVerificationRequest(BaseModel):
     swift_code: Optional[str] = Field(None, alias="swiftCode")

     model_config = ConfigDict(populate_by_name=True)


class SwiftVerificationResponse(BaseModel):
     valid: bool
     message: str


class PaymentChecksResponse(BaseModel):
     """Server-side run of both checks for one stored payment."""
     payment_id: int = Field(..., alias="paymentId")
     accounts_verified: bool = Field(..., alias="accountsVerified")
     accounts_message: str = Field(..., alias="accountsMessage")
     swift_code_verified: bool = Field(..., alias="swiftCodeVerified")
     swift_message: str = Field(..., alias="swiftMessage")

     model_config = ConfigDict(populate_by_name=True)


class UpdateVerificationRequest(BaseModel):
     """Body for PATCH /update-verification. Both flags must be real booleans."""
     id: StrictInt = Field(..., alias="_id", gt=0)
     accounts_verified: StrictBool = Field(..., alias="accountsVerified")
     swift_code_verified: StrictBool = Field(..., alias="swiftCodeVerified")

     model_config = ConfigDict(populate_by_name=True)


class PaymentIdRequest(BaseModel):
     id: StrictInt = Field(..., alias="_id", gt=0)

     model_config = ConfigDict(populate_by_name=True)


class DeletePaymentRequest(BaseModel):
     """Body for DELETE /delete. The id may instead come from the ``id`` query parameter."""
     id: Optional[StrictInt] = Field(None, alias="_id", gt=0)

     model_config = ConfigDict(populate_by_name=True)


class BulkDeleteRequest(BaseModel):
     """Body for POST /delete-multiple. Shape is checked by the service."""
     ids: Optional[Any] = None


class BulkDeleteResponse(BaseModel):
     message: str
     deleted_count: int = Field(..., alias="deletedCount")

     model_config = ConfigDict(populate_by_name=True)


class BulkSubmitItem(BaseModel):
     id: StrictInt = Field(..., alias="_id", gt=0)
     accounts_verified: StrictBool = Field(..., alias="accountsVerified")
     swift_code_verified: StrictBool = Field(..., alias="swiftCodeVerified")

     model_config = ConfigDict(populate_by_name=True)


class BulkSubmitRequest(BaseModel):
     items: List[BulkSubmitItem]


class BulkItemResponse(BaseModel):
     id: int
     ok: bool
     message: str
     error: Optional[str] = None
     payment: Optional[PaymentResponse] = None


class BulkSubmitResponse(BaseModel):
     message: str
     submitted: int
     failed: int
     results: List[BulkItemResponse]
