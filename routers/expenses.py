# routers/expenses.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_owner_account
from routers.responses import build_expense_response
from schemas.common import ActionResult
from schemas.expense import ExpenseActionResponse, ExpenseCreate, ExpenseListResponse
from services.account_service import AccountContext
from services.expense_service import ExpenseService

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.get("", response_model=ExpenseListResponse, summary="List expenses")
def list_expenses(
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     expenses = ExpenseService.list_expenses(db, account)
     return ExpenseListResponse(
          expenses=[build_expense_response(e) for e in expenses],
          total=len(expenses),
     )


@router.post(
     "",
     response_model=ExpenseActionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record an expense"
)
def add_expense(
     body: ExpenseCreate,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     expense = ExpenseService.add_expense(db, account, body)
     return ExpenseActionResponse(expense=build_expense_response(expense))


@router.delete("/{expense_id}", response_model=ActionResult, summary="Delete expense")
def delete_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     account: AccountContext = Depends(get_owner_account)
):
     ExpenseService.delete_expense(db, account, expense_id)
     return ActionResult()
