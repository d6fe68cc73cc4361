# acai_control/modules/sales/router.py
from fastapi import APIRouter, Depends
from typing import List, Optional, Tuple
from datetime import datetime

from acai_control.api.dependencies import date_range, get_storage
from acai_control.shared.storage import Storage
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse

router = APIRouter(prefix="/sales", tags=["Vendas"])

# ==================== REGISTRO DE VENDAS ====================

@router.post("", response_model=SaleResponse, status_code=201)
async def create_sale(
    sale_data: SaleCreateRequest,
    storage: Storage = Depends(get_storage)
):
    """
    Registrar venda completa

    Inclui:
    - Preço de cada item congelado no momento da venda
    - Subtotal, comissão do vendedor e total
    - Lançamento automático de entrada no fluxo de caixa
    """
    service = SalesService(storage)
    return service.create_sale(sale_data)

# ==================== CONSULTA DE VENDAS ====================

@router.get("", response_model=List[SaleResponse])
async def list_sales(
    period: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    storage: Storage = Depends(get_storage)
):
    """
    Listar vendas do período (mais recentes primeiro)
    """
    start, end = period
    return SalesService(storage).list_sales(start, end)

@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(sale_id: int, storage: Storage = Depends(get_storage)):
    return SalesService(storage).get_sale(sale_id)
