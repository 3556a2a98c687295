from fastapi import APIRouter

from .credits import admin_credit_router, credit_router
from .customers import admin_customer_router, customer_router, savings_router
from .health import health_router
from .reports import analytics_router, notification_router, transaction_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(customer_router, tags=["Customers"])
router.include_router(savings_router, tags=["Savings"])
router.include_router(admin_customer_router, tags=["Admin Customers"])
router.include_router(credit_router, tags=["Credits"])
router.include_router(admin_credit_router, tags=["Admin Credits"])
router.include_router(transaction_router, tags=["Transactions"])
router.include_router(notification_router, tags=["Notifications"])
router.include_router(analytics_router, tags=["Admin Analytics"])
