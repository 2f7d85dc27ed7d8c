# routers/properties.py
"""
Property API routes. Owners manage the properties they own; tenants can
list the properties of their tenancies.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_account, get_owner_account
from routers.responses import build_property_response
from schemas.common import ActionResult
from schemas.property import (
     PropertyActionResponse,
     PropertyCreate,
     PropertyListResponse,
     PropertyOwnerAdd,
     PropertyUpdate,
)
from services.account_service import AccountContext
from services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=PropertyListResponse, summary="List properties")
def list_properties(
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_current_account)
):
     properties = PropertyService.list_properties(db, account)
     return PropertyListResponse(
          properties=[build_property_response(p) for p in properties],
          total=len(properties),
     )


@router.post(
     "",
     response_model=PropertyActionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a property"
)
def add_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     prop = PropertyService.add_property(db, account, body)
     return PropertyActionResponse(property=build_property_response(prop))


@router.put("/{property_id}", response_model=PropertyActionResponse, summary="Update property")
def update_property(
     property_id: int,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     prop = PropertyService.update_property(db, account, property_id, body)
     return PropertyActionResponse(property=build_property_response(prop))


@router.post("/{property_id}/owners", response_model=PropertyActionResponse, summary="Add a co-owner")
def add_property_owner(
     property_id: int,
     body: PropertyOwnerAdd,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     prop = PropertyService.add_owner(db, account, property_id, body.email)
     return PropertyActionResponse(property=build_property_response(prop))


@router.delete("/{property_id}", response_model=ActionResult, summary="Delete property")
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     """Removes the property with its tenancies, their invoices and its expenses."""
     PropertyService.delete_property(db, account, property_id)
     return ActionResult()
