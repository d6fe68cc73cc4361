# acai_control/modules/reports/__init__.py
"""
Módulo de Relatórios - resumo diário, totais por vendedor e por produto
"""

from .router import router as reports_router
from .service import ReportsService

__all__ = [
    "reports_router",
    "ReportsService"
]
