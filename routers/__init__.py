# routers/__init__.py
from .auth import router as auth_router
from .session import router as session_router
from .properties import router as properties_router
from .tenancies import router as tenancies_router
from .invoices import router as invoices_router
from .payments import router as payments_router
from .expenses import router as expenses_router

all_routers = [
     auth_router,
     session_router,
     properties_router,
     tenancies_router,
     invoices_router,
     payments_router,
     expenses_router,
]

__all__ = ["all_routers"]
