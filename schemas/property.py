"""
Pydantic schemas for properties.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, ConfigDict

from .common import ActionResult


class PropertyCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)

     model_config = ConfigDict(
          json_schema_extra={"example": {"name": "Main House A", "address": "123 Maple St"}}
     )


class PropertyUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     address: Optional[str] = Field(None, min_length=1, max_length=500)


class PropertyOwnerAdd(BaseModel):
     email: EmailStr = Field(..., description="E-mail of an existing user to add as co-owner")


class PropertyResponse(BaseModel):
     id: int
     name: str
     address: str
     owner_ids: List[str]
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PropertyListResponse(BaseModel):
     properties: List[PropertyResponse]
     total: int


class PropertyActionResponse(ActionResult):
     property: PropertyResponse
