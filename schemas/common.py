"""
Uniform result envelope returned by every mutating endpoint.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ActionResult(BaseModel):
     """{success, error?}; callers branch on `success`."""
     success: bool = True
     error: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"success": False, "error": "Invoice with ID 12 not found"}
          }
     )
