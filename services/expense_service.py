# services/expense_service.py
"""
Expense Service - property costs, scoped to the owner's properties.
"""
from sqlalchemy.orm import Session

from database import atomic_batch
from models import Expense, ExpenseType
from schemas.expense import ExpenseCreate
from .account_service import AccountContext, get_owned_property, owned_property_ids
from .exceptions import NotFoundError, PermissionDeniedError


class ExpenseService:

     @staticmethod
     def list_expenses(db: Session, account: AccountContext) -> list[Expense]:
          account.require_owner()
          property_ids = owned_property_ids(db, account.uid)
          if not property_ids:
               return []
          return (
               db.query(Expense)
               .filter(Expense.property_id.in_(property_ids))
               .order_by(Expense.date.desc())
               .all()
          )

     @staticmethod
     def add_expense(db: Session, account: AccountContext, data: ExpenseCreate) -> Expense:
          get_owned_property(db, account, data.property_id)
          expense = Expense(
               property_id=data.property_id,
               type=ExpenseType(data.type.value),
               amount=data.amount,
               description=data.description,
               date=data.date,
          )
          with atomic_batch(db, "add expense"):
               db.add(expense)
          return expense

     @staticmethod
     def delete_expense(db: Session, account: AccountContext, expense_id: int) -> None:
          account.require_owner()
          expense = db.get(Expense, expense_id)
          if expense is None:
               raise NotFoundError(f"Expense with ID {expense_id} not found")
          if expense.property_id not in owned_property_ids(db, account.uid):
               raise PermissionDeniedError("This expense is not on one of your properties")
          with atomic_batch(db, f"delete expense {expense_id}"):
               db.delete(expense)
