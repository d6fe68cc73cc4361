# acai_control/modules/catalog/__init__.py
"""
Módulo de Catálogo - Produtos e Vendedores

- Produtos com preço unitário ou preço por litro (açaí personalizado)
- Vendedores com taxa de comissão
- Exclusão lógica: registros desativados somem das listagens mas continuam
  referenciados pelas vendas antigas

Arquitetura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negócio
- schemas.py: Modelos Pydantic de request/response
"""

from .router import products_router, vendors_router
from .service import CatalogService

__all__ = [
    "products_router",
    "vendors_router",
    "CatalogService"
]
