# acai_control/modules/cashflow/service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from acai_control.shared.database.models import CashFlowEntry, CashFlowType
from acai_control.shared.money import round_money, sum_money
from acai_control.shared.storage import Storage
from .schemas import CashFlowEntryCreateRequest

logger = logging.getLogger(__name__)


@dataclass
class CashFlowSummary:
    total_income: Decimal
    total_expenses: Decimal
    net_flow: Decimal
    income_count: int
    expense_count: int


def summarize_entries(entries: Iterable[CashFlowEntry]) -> CashFlowSummary:
    """Entradas menos saídas; o saldo pode ser negativo"""
    entries = list(entries)
    incomes = [e.amount for e in entries if e.type == CashFlowType.income.value]
    expenses = [e.amount for e in entries if e.type == CashFlowType.expense.value]

    total_income = sum_money(incomes)
    total_expenses = sum_money(expenses)
    return CashFlowSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_flow=round_money(total_income - total_expenses),
        income_count=len(incomes),
        expense_count=len(expenses)
    )


class CashFlowService:
    """
    Fluxo de caixa: lançamentos manuais e os gerados automaticamente pelas vendas
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def list_entries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[CashFlowEntry]:
        return self.storage.list_cash_flow_entries(start, end)

    def create_entry(self, entry_data: CashFlowEntryCreateRequest) -> CashFlowEntry:
        """
        Lançamento manual; nunca fica vinculado a uma venda
        """
        entry = self.storage.create_cash_flow_entry(
            type=entry_data.type.value,
            description=entry_data.description,
            amount=round_money(entry_data.amount),
            sale_id=None
        )
        logger.info(
            "Lançamento manual registrado: id=%s tipo=%s valor=%s",
            entry.id,
            entry.type,
            entry.amount
        )
        return entry

    def summary(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> CashFlowSummary:
        return summarize_entries(self.list_entries(start, end))
