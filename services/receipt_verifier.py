"""Claude client that judges tenant payment receipts.

The result is advisory: it never changes an invoice. A receipt judged
inaccurate is a successful call. A missing API key, a refused receipt, a
failed call or an unreadable answer raises ReceiptVerificationError.
"""
import base64
import binascii
import json
import logging
import os
from decimal import Decimal
from typing import Optional, Tuple

import httpx
from anthropic import APIError, AsyncAnthropic
from dotenv import load_dotenv
from pydantic import ValidationError

from schemas.payment import ReceiptVerificationRequest, ReceiptVerificationResult
from .exceptions import ReceiptVerificationError

load_dotenv()

logger = logging.getLogger(__name__)

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
RECEIPT_VERIFIER_MODEL = os.getenv("RECEIPT_VERIFIER_MODEL", "claude-sonnet-4-5-20250929")

SUPPORTED_MEDIA_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
# Largest image the Messages API accepts
MAX_RECEIPT_BYTES = int(os.getenv("MAX_RECEIPT_BYTES", str(5 * 1024 * 1024)))

RECEIPT_VERIFICATION_PROMPT = """You are an AI assistant helping property managers verify payment receipts submitted by tenants.

You will receive an image of a payment receipt together with the expected payment amount, the invoice ID, the tenant name and the property name. Determine whether the receipt is accurate and matches the expected amount.

Read the payment amount from the receipt and compare it with the expected amount. If they match, the receipt is accurate. If there are discrepancies (different amount, unreadable receipt, payer or date that does not fit), explain them in the notes.

Respond ONLY with a JSON object of this shape:
{"is_accurate": true or false, "extracted_amount": number or null, "notes": "string"}"""


class ReceiptVerifier:
     """Sends one receipt at a time to Claude. Calls are not retried."""

     def __init__(
          self,
          api_key: Optional[str] = None,
          model: Optional[str] = None,
          client: Optional[AsyncAnthropic] = None,
     ):
          api_key = api_key or ANTHROPIC_API_KEY
          if client is None and api_key:
               client = AsyncAnthropic(
                    api_key=api_key,
                    timeout=httpx.Timeout(60.0, connect=10.0),
                    max_retries=0,
               )
          if client is None:
               logger.warning("ANTHROPIC_API_KEY is not set; receipt verification is disabled")
          self.client = client
          self.model = model or RECEIPT_VERIFIER_MODEL

     @staticmethod
     def _load_receipt(receipt: str) -> Tuple[str, str]:
          """
          Return (base64 data, media type) for a base64 image data URI.

          The receipt is never fetched from a URL: references other than a
          data URI are refused.
          """
          if not receipt.startswith("data:"):
               raise ReceiptVerificationError("Only data: URI receipts can be verified")
          header, _, data = receipt.partition(",")
          media_type = header[len("data:"):].split(";")[0]
          if ";base64" not in header or not data:
               raise ReceiptVerificationError("Receipt data URI must be base64 encoded")
          if media_type not in SUPPORTED_MEDIA_TYPES:
               raise ReceiptVerificationError(f"Unsupported receipt image type: {media_type or 'unknown'}")
          # base64 decodes to at most 3 bytes per 4 characters
          if len(data) * 3 // 4 > MAX_RECEIPT_BYTES:
               raise ReceiptVerificationError("Receipt image is too large")
          try:
               base64.b64decode(data, validate=True)
          except (binascii.Error, ValueError) as e:
               raise ReceiptVerificationError("Receipt data URI is not valid base64") from e
          return data, media_type

     @staticmethod
     def _details(request: ReceiptVerificationRequest) -> str:
          return (
               f"Tenant Name: {request.tenant_name}\n"
               f"Property Name: {request.property_name}\n"
               f"Invoice ID: {request.invoice_id}\n"
               f"Expected Amount: {request.expected_amount}"
          )

     @staticmethod
     def _parse(response_text: str) -> ReceiptVerificationResult:
          # Clean up the response text (remove markdown code blocks if present)
          if "```json" in response_text:
               response_text = response_text.split("```json")[1].split("```")[0].strip()
          elif "```" in response_text:
               response_text = response_text.split("```")[1].split("```")[0].strip()

          try:
               data = json.loads(response_text)
               if data.get("extracted_amount") is not None:
                    data["extracted_amount"] = Decimal(str(data["extracted_amount"]))
               return ReceiptVerificationResult(**data)
          except (json.JSONDecodeError, AttributeError, ValidationError, ArithmeticError) as e:
               logger.error(f"Failed to parse receipt verification response: {e}")
               logger.error(f"Response was: {response_text}")
               raise ReceiptVerificationError("The verification service returned an unreadable answer") from e

     async def verify(self, request: ReceiptVerificationRequest) -> ReceiptVerificationResult:
          """
          Judge one receipt against the invoice's expected amount.

          Raises:
               ReceiptVerificationError: the receipt could not be loaded, the
                    API call failed, or the answer could not be parsed
          """
          if self.client is None:
               raise ReceiptVerificationError("The verification service is not configured")
          data, media_type = self._load_receipt(request.receipt)

          try:
               response = await self.client.messages.create(
                    model=self.model,
                    max_tokens=1024,
                    temperature=0,
                    system=RECEIPT_VERIFICATION_PROMPT,
                    messages=[{
                         "role": "user",
                         "content": [
                              {
                                   "type": "image",
                                   "source": {"type": "base64", "media_type": media_type, "data": data},
                              },
                              {"type": "text", "text": self._details(request)},
                         ],
                    }],
               )
          except APIError as e:
               logger.error(f"Receipt verification call failed for invoice {request.invoice_id}: {e}")
               raise ReceiptVerificationError("The verification service is unavailable") from e

          if hasattr(response, "usage"):
               logger.info(
                    f"Claude API call: {response.usage.input_tokens} input, "
                    f"{response.usage.output_tokens} output tokens"
               )

          text = next(
               (block.text for block in response.content or [] if getattr(block, "type", None) == "text"),
               None,
          )
          if text is None:
               logger.error(f"Receipt verification for invoice {request.invoice_id} returned no text")
               raise ReceiptVerificationError("The verification service returned an unreadable answer")
          result = self._parse(text)
          logger.info(
               f"Receipt for invoice {request.invoice_id} judged "
               f"{'accurate' if result.is_accurate else 'inaccurate'}"
          )
          return result
