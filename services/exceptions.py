"""
Domain errors raised by the service layer.

Each carries the HTTP status the API answers with; main.py renders all of
them as {"success": false, "error": message}.
"""
from database import StorageError


class ServiceError(Exception):
     status_code = 400

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class NotFoundError(ServiceError):
     status_code = 404


class PermissionDeniedError(ServiceError):
     status_code = 403


class BusinessRuleError(ServiceError):
     """The request is well-formed but the invoice/tenancy state forbids it."""
     status_code = 409


class IdentityError(ServiceError):
     """Account creation, sign-in or password-token problems."""
     status_code = 400


class ReceiptVerificationError(ServiceError):
     """The AI judge could not be reached or answered unusably."""
     status_code = 502


__all__ = [
     "ServiceError",
     "NotFoundError",
     "PermissionDeniedError",
     "BusinessRuleError",
     "IdentityError",
     "ReceiptVerificationError",
     "StorageError",
]
