from .employee_payments import router as employee_payments_router
from .payments import router as payments_router

__all__ = [
     "employee_payments_router",
     "payments_router",
]
