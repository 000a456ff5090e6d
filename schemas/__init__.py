from .payment import (
     SwiftResponse,
     PaymentResponse,
     PaymentActionResponse,
     PaymentCreate,
     AccountVerificationRequest,
     AccountVerificationResponse,
     SwiftVerificationRequest,
     SwiftVerificationResponse,
     PaymentChecksResponse,
     UpdateVerificationRequest,
     PaymentIdRequest,
     DeletePaymentRequest,
     BulkDeleteRequest,
     BulkDeleteResponse,
     BulkSubmitItem,
     BulkSubmitRequest,
     BulkItemResponse,
     BulkSubmitResponse,
)

__all__ = [
     "SwiftResponse",
     "PaymentResponse",
     "PaymentActionResponse",
     "PaymentCreate",
     "AccountVerificationRequest",
     "AccountVerificationResponse",
     "SwiftVerificationRequest",
     "SwiftVerificationResponse",
     "PaymentChecksResponse",
     "UpdateVerificationRequest",
     "PaymentIdRequest",
     "DeletePaymentRequest",
     "BulkDeleteRequest",
     "BulkDeleteResponse",
     "BulkSubmitItem",
     "BulkSubmitRequest",
     "BulkItemResponse",
     "BulkSubmitResponse",
]
