# acai_control/modules/sales/__init__.py
"""
Módulo de Vendas

- Registro de venda com itens, comissão do vendedor e lançamento de caixa
- Consulta de vendas por período e por id

Arquitetura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negócio
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as sales_router
from .service import SalesService, compute_sale_totals

__all__ = [
    "sales_router",
    "SalesService",
    "compute_sale_totals"
]
