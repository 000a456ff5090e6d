from .errors import (
     FailureKind,
     PaymentError,
     ValidationError,
     NotFoundError,
     PreconditionFailedError,
     TransientError,
)
from .swift_directory import SwiftDirectory, normalize_swift_code
from .verification_service import VerificationService, AccountVerdict, SwiftVerdict, PaymentVerdict
from .payment_service import PaymentService
from .bulk_service import SubmitItem, BulkItemResult, BulkSubmitResult, bulk_submit, bulk_delete

__all__ = [
     "FailureKind",
     "PaymentError",
     "ValidationError",
     "NotFoundError",
     "PreconditionFailedError",
     "TransientError",
     "SwiftDirectory",
     "normalize_swift_code",
     "VerificationService",
     "AccountVerdict",
     "SwiftVerdict",
     "PaymentVerdict",
     "PaymentService",
     "SubmitItem",
     "BulkItemResult",
     "BulkSubmitResult",
     "bulk_submit",
     "bulk_delete",
]
