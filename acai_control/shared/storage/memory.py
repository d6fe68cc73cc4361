import itertools
import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

from acai_control.shared.database.models import (
    CashFlowEntry, Product, RecordStatus, Sale, SaleItem, Vendor
)
from .base import SALE_ENTRY_DESCRIPTION, Clock, Storage, in_range

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """
    Armazenamento em memória: um dicionário id -> registro por entidade e um
    contador por entidade para gerar ids, tudo protegido por um único lock.

    As leituras devolvem uma fotografia tirada sob o lock; a venda só entra no
    dicionário depois dos itens e do lançamento de caixa.
    """

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._lock = threading.RLock()

        self._products: Dict[int, Product] = {}
        self._vendors: Dict[int, Vendor] = {}
        self._sales: Dict[int, Sale] = {}
        self._sale_items: Dict[int, SaleItem] = {}
        self._cash_flow_entries: Dict[int, CashFlowEntry] = {}

        self._product_ids = itertools.count(1)
        self._vendor_ids = itertools.count(1)
        self._sale_ids = itertools.count(1)
        self._sale_item_ids = itertools.count(1)
        self._cash_flow_ids = itertools.count(1)

    def has_catalog(self) -> bool:
        with self._lock:
            return bool(self._products or self._vendors)

    # ==================== PRODUTOS ====================

    def list_products(self) -> List[Product]:
        with self._lock:
            return [p for p in self._products.values() if p.active]

    def get_product(self, product_id: int) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def create_product(self, **fields: Any) -> Product:
        with self._lock:
            product = Product(id=next(self._product_ids), status=RecordStatus.active.value, **fields)
            self._products[product.id] = product
            return product

    def update_product(self, product_id: int, **changes: Any) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            if not product:
                return None
            for field, value in changes.items():
                setattr(product, field, value)
            return product

    def delete_product(self, product_id: int) -> bool:
        with self._lock:
            product = self._products.get(product_id)
            if not product:
                return False
            product.deactivate()
            return True

    # ==================== VENDEDORES ====================

    def list_vendors(self) -> List[Vendor]:
        with self._lock:
            return [v for v in self._vendors.values() if v.active]

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        with self._lock:
            return self._vendors.get(vendor_id)

    def create_vendor(self, **fields: Any) -> Vendor:
        with self._lock:
            vendor = Vendor(id=next(self._vendor_ids), status=RecordStatus.active.value, **fields)
            self._vendors[vendor.id] = vendor
            return vendor

    def update_vendor(self, vendor_id: int, **changes: Any) -> Optional[Vendor]:
        with self._lock:
            vendor = self._vendors.get(vendor_id)
            if not vendor:
                return None
            for field, value in changes.items():
                setattr(vendor, field, value)
            return vendor

    def delete_vendor(self, vendor_id: int) -> bool:
        with self._lock:
            vendor = self._vendors.get(vendor_id)
            if not vendor:
                return False
            vendor.deactivate()
            return True

    # ==================== VENDAS ====================

    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Sale]:
        with self._lock:
            sales = [s for s in self._sales.values() if in_range(s.created_at, start, end)]
        return sorted(sales, key=lambda s: (s.created_at, s.id), reverse=True)

    def get_sale(self, sale_id: int) -> Optional[Sale]:
        with self._lock:
            return self._sales.get(sale_id)

    def create_sale(self, sale: Sale, items: List[SaleItem], entry: CashFlowEntry) -> Sale:
        with self._lock:
            # Resolver tudo antes de qualquer escrita
            vendor = self._vendors[sale.vendor_id]
            products = [self._products[item.product_id] for item in items]

            created_at = self._next_timestamp()
            sale.id = next(self._sale_ids)
            sale.created_at = created_at
            sale.vendor = vendor

            for item, product in zip(items, products):
                item.id = next(self._sale_item_ids)
                item.sale_id = sale.id
                item.product = product
            sale.items = list(items)

            entry.id = next(self._cash_flow_ids)
            entry.sale_id = sale.id
            entry.description = SALE_ENTRY_DESCRIPTION.format(sale_id=sale.id)
            entry.created_at = created_at

            # Filhos primeiro: a venda só fica visível quando já está completa
            for item in items:
                self._sale_items[item.id] = item
            self._cash_flow_entries[entry.id] = entry
            self._sales[sale.id] = sale

        logger.debug("Venda %s gravada em memória com %s itens", sale.id, len(items))
        return sale

    # ==================== FLUXO DE CAIXA ====================

    def list_cash_flow_entries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[CashFlowEntry]:
        with self._lock:
            entries = [
                e for e in self._cash_flow_entries.values()
                if in_range(e.created_at, start, end)
            ]
        return sorted(entries, key=lambda e: (e.created_at, e.id), reverse=True)

    def create_cash_flow_entry(self, **fields: Any) -> CashFlowEntry:
        with self._lock:
            entry = CashFlowEntry(
                id=next(self._cash_flow_ids),
                created_at=self._next_timestamp(),
                **fields
            )
            self._cash_flow_entries[entry.id] = entry
            return entry
