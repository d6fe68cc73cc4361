# acai_control/modules/reports/service.py
"""
Relatórios sobre as vendas gravadas.

Todos os cálculos são funções puras da lista de vendas devolvida pelo
armazenamento, sem cache. Empates no "mais vendido" ficam com o menor id.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Union

from acai_control.shared.dates import end_of_day, start_of_day
from acai_control.shared.database.models import Sale
from acai_control.shared.money import ZERO, sum_money, to_decimal
from acai_control.shared.storage import Storage

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass
class DailyStats:
    total_sales: int
    total_revenue: Decimal
    total_commissions: Decimal
    top_vendor: str
    top_product: str


@dataclass
class VendorStats:
    vendor_id: int
    vendor_name: str
    total_sales: int = 0
    total_revenue: Decimal = ZERO
    total_commissions: Decimal = ZERO


@dataclass
class ProductStats:
    product_id: int
    product_name: str
    quantity: Decimal = Decimal("0")
    revenue: Decimal = ZERO


def pick_top(scores: Dict[int, Union[int, Decimal]]) -> Optional[int]:
    """Maior pontuação; empate fica com o menor id"""
    if not scores:
        return None
    return min(scores, key=lambda key: (-scores[key], key))


def compute_daily_stats(sales: Iterable[Sale]) -> DailyStats:
    sales = list(sales)

    vendor_counts: Dict[int, int] = defaultdict(int)
    vendor_names: Dict[int, str] = {}
    product_quantities: Dict[int, Decimal] = defaultdict(lambda: Decimal(0))
    product_names: Dict[int, str] = {}

    for sale in sales:
        vendor_counts[sale.vendor_id] += 1
        vendor_names[sale.vendor_id] = sale.vendor.name if sale.vendor else NOT_AVAILABLE
        for item in sale.items:
            product_quantities[item.product_id] += to_decimal(item.quantity)
            product_names[item.product_id] = item.product.name if item.product else NOT_AVAILABLE

    top_vendor_id = pick_top(vendor_counts)
    top_product_id = pick_top(product_quantities)

    return DailyStats(
        total_sales=len(sales),
        total_revenue=sum_money(sale.total for sale in sales),
        total_commissions=sum_money(sale.commission for sale in sales),
        top_vendor=vendor_names[top_vendor_id] if top_vendor_id is not None else NOT_AVAILABLE,
        top_product=product_names[top_product_id] if top_product_id is not None else NOT_AVAILABLE
    )


def compute_vendor_stats(sales: Iterable[Sale]) -> List[VendorStats]:
    stats: Dict[int, VendorStats] = {}

    for sale in sales:
        row = stats.get(sale.vendor_id)
        if row is None:
            row = stats[sale.vendor_id] = VendorStats(
                vendor_id=sale.vendor_id,
                vendor_name=sale.vendor.name if sale.vendor else NOT_AVAILABLE
            )
        row.total_sales += 1
        row.total_revenue += to_decimal(sale.total)
        row.total_commissions += to_decimal(sale.commission)

    return [stats[vendor_id] for vendor_id in sorted(stats)]


def compute_product_stats(sales: Iterable[Sale], limit: Optional[int] = None) -> List[ProductStats]:
    stats: Dict[int, ProductStats] = {}

    for sale in sales:
        for item in sale.items:
            row = stats.get(item.product_id)
            if row is None:
                row = stats[item.product_id] = ProductStats(
                    product_id=item.product_id,
                    product_name=item.product.name if item.product else NOT_AVAILABLE
                )
            row.quantity += to_decimal(item.quantity)
            row.revenue += to_decimal(item.total)

    ranked = sorted(stats.values(), key=lambda row: (-row.revenue, row.product_id))
    return ranked[:limit] if limit is not None else ranked


class ReportsService:
    """
    Estatísticas diárias, por vendedor e por produto
    """

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = datetime.now):
        self.storage = storage
        self.clock = clock

    def daily_stats(self, day: Optional[date] = None) -> DailyStats:
        """
        Resumo do dia no calendário local: [00:00, 23:59:59.999999]
        """
        day = day or self.clock().date()
        sales = self.storage.list_sales(start_of_day(day), end_of_day(day))
        stats = compute_daily_stats(sales)
        logger.debug("Resumo de %s: %s vendas, receita %s", day, stats.total_sales, stats.total_revenue)
        return stats

    def vendor_stats(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[VendorStats]:
        return compute_vendor_stats(self.storage.list_sales(start, end))

    def product_stats(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> List[ProductStats]:
        return compute_product_stats(self.storage.list_sales(start, end), limit)
