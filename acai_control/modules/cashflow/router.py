# acai_control/modules/cashflow/router.py
from fastapi import APIRouter, Depends
from typing import List, Optional, Tuple
from datetime import datetime

from acai_control.api.dependencies import date_range, get_storage
from acai_control.shared.storage import Storage
from .service import CashFlowService
from .schemas import (
    CashFlowEntryCreateRequest, CashFlowEntryResponse, CashFlowSummaryResponse
)

router = APIRouter(prefix="/cashflow", tags=["Fluxo de Caixa"])


@router.get("", response_model=List[CashFlowEntryResponse])
async def list_cash_flow_entries(
    period: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    storage: Storage = Depends(get_storage)
):
    """
    Listar lançamentos do período (mais recentes primeiro)
    """
    start, end = period
    return CashFlowService(storage).list_entries(start, end)

@router.get("/summary", response_model=CashFlowSummaryResponse)
async def get_cash_flow_summary(
    period: Tuple[Optional[datetime], Optional[datetime]] = Depends(date_range),
    storage: Storage = Depends(get_storage)
):
    """
    Total de entradas, total de saídas e saldo do período
    """
    start, end = period
    return CashFlowService(storage).summary(start, end)

@router.post("", response_model=CashFlowEntryResponse, status_code=201)
async def create_cash_flow_entry(
    entry_data: CashFlowEntryCreateRequest,
    storage: Storage = Depends(get_storage)
):
    """
    Registrar entrada ou saída manual, independente das vendas
    """
    return CashFlowService(storage).create_entry(entry_data)
