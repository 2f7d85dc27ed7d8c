"""
Pydantic schemas for property expenses.
"""
from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .common import ActionResult


class ExpenseTypeEnum(str, Enum):
     FIXED_SERVICE = "fixed_service"
     MAINTENANCE_OTHER = "maintenance_other"


class ExpenseCreate(BaseModel):
     property_id: int = Field(..., gt=0)
     type: ExpenseTypeEnum
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     description: str = Field(..., min_length=1, max_length=500)
     date: datetime

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "type": "maintenance_other",
                    "amount": 350.00,
                    "description": "Plumbing repair",
                    "date": "2024-07-15T10:00:00"
               }
          }
     )


class ExpenseResponse(BaseModel):
     id: int
     property_id: int
     type: ExpenseTypeEnum
     amount: Decimal
     description: str
     date: datetime

     model_config = ConfigDict(from_attributes=True)


class ExpenseListResponse(BaseModel):
     expenses: List[ExpenseResponse]
     total: int


class ExpenseActionResponse(ActionResult):
     expense: ExpenseResponse
