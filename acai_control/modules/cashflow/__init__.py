# acai_control/modules/cashflow/__init__.py
"""
Módulo de Fluxo de Caixa - lançamentos de entrada/saída e saldo do período
"""

from .router import router as cashflow_router
from .service import CashFlowService

__all__ = [
    "cashflow_router",
    "CashFlowService"
]
