# acai_control/api/v1/router.py
from fastapi import APIRouter, Request

from acai_control.modules.catalog import products_router, vendors_router
from acai_control.modules.sales import sales_router
from acai_control.modules.reports import reports_router
from acai_control.modules.cashflow import cashflow_router


# Router principal da API
api_router = APIRouter()

# ==================== MÓDULOS ====================

api_router.include_router(products_router)
api_router.include_router(vendors_router)
api_router.include_router(sales_router)
api_router.include_router(reports_router)
api_router.include_router(cashflow_router)

# ==================== ENDPOINTS RAIZ ====================

@api_router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "storage": type(request.app.state.storage).__name__,
        "modules": {
            "catalog": "/api/products, /api/vendors",
            "sales": "/api/sales",
            "reports": "/api/reports",
            "cashflow": "/api/cashflow"
        }
    }
