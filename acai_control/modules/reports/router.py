# acai_control/modules/reports/router.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional, Tuple
from datetime import date, datetime

from acai_control.api.dependencies import date_range, get_clock, get_storage
from acai_control.shared.storage import Storage
from .service import ReportsService
from .schemas import DailyStatsResponse, ProductStatsResponse, VendorStatsResponse

router = APIRouter(prefix="/reports", tags=["Relatórios"])


@router.get("/daily-stats", response_model=DailyStatsResponse)
async def get_daily_stats(
    day: Optional[date] = Query(None, alias="date", description="Dia do resumo (padrão: hoje)"),
    storage: Storage = Depends(get_storage),
    clock=Depends(get_clock)
):
    """
    Resumo do dia: número de vendas, receita, comissões, vendedor e produto destaque
    """
    service = ReportsService(storage, clock=clock)
    return service.daily_stats(day)

@router.get("/vendor-stats", response_model=List[VendorStatsResponse])
async def get_vendor_stats(
    period: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    storage: Storage = Depends(get_storage)
):
    """
    Totais por vendedor no período; apenas vendedores com ao menos uma venda
    """
    start, end = period
    return ReportsService(storage).vendor_stats(start, end)

@router.get("/product-stats", response_model=List[ProductStatsResponse])
async def get_product_stats(
    period: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    limit: int = Query(5, ge=1, le=100, description="Quantidade máxima de produtos"),
    storage: Storage = Depends(get_storage)
):
    """
    Produtos mais vendidos no período, ordenados por receita
    """
    start, end = period
    return ReportsService(storage).product_stats(start, end, limit=limit)
