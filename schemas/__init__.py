from .common import ActionResult
from .invoice import (
     InvoiceGenerateRequest,
     InvoiceGenerateResponse,
     UtilitiesUpdate,
     InvoiceResponse,
     InvoiceListResponse,
     InvoiceActionResponse,
)
from .payment import (
     PaymentSubmitRequest,
     PaymentSubmitResponse,
     PaymentAllocation,
     ReceiptVerificationRequest,
     ReceiptVerificationResult,
     ReceiptVerificationResponse,
)

__all__ = [
     "ActionResult",
     "InvoiceGenerateRequest",
     "InvoiceGenerateResponse",
     "UtilitiesUpdate",
     "InvoiceResponse",
     "InvoiceListResponse",
     "InvoiceActionResponse",
     "PaymentSubmitRequest",
     "PaymentSubmitResponse",
     "PaymentAllocation",
     "ReceiptVerificationRequest",
     "ReceiptVerificationResult",
     "ReceiptVerificationResponse",
]
