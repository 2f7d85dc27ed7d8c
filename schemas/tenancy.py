"""
Pydantic schemas for tenancy onboarding and editing.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, ConfigDict

from .common import ActionResult


class TenancyCreate(BaseModel):
     """Owner onboards a tenant onto one of their properties."""
     name: str = Field(..., min_length=1, max_length=200)
     email: EmailStr
     phone: str = Field(..., pattern=r"^\+?[0-9 ()-]{7,20}$")
     property_id: int = Field(..., gt=0)
     fixed_monthly_rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     pays_utilities: bool = False
     start_date: date

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Jane Smith",
                    "email": "jane.smith@email.com",
                    "phone": "+1 555 0100",
                    "property_id": 2,
                    "fixed_monthly_rent": 850.00,
                    "pays_utilities": False,
                    "start_date": "2024-07-01"
               }
          }
     )


class TenancyUpdate(BaseModel):
     property_id: Optional[int] = Field(None, gt=0)
     fixed_monthly_rent: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     pays_utilities: Optional[bool] = None
     start_date: Optional[date] = None
     phone: Optional[str] = Field(None, pattern=r"^\+?[0-9 ()-]{7,20}$")


class TenancyDeactivate(BaseModel):
     end_date: Optional[date] = Field(None, description="Lease end; defaults to today")


class TenancyResponse(BaseModel):
     id: int
     user_id: str
     property_id: int
     fixed_monthly_rent: Decimal
     pays_utilities: bool
     start_date: date
     end_date: Optional[date] = None
     active: bool
     created_at: datetime
     updated_at: datetime

     # Optional related data
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     property_name: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class TenancyListResponse(BaseModel):
     tenancies: List[TenancyResponse]
     total: int


class TenancyCreateResponse(ActionResult):
     tenancy_id: int
     is_new_user: bool
     link: Optional[str] = Field(None, description="Password-set link for a newly created user")
