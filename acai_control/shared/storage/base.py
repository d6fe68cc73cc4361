"""Contrato de armazenamento compartilhado pelas implementações em memória e SQL."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, List, Optional

from acai_control.shared.database.models import (
    CashFlowEntry, Product, Sale, SaleItem, Vendor
)

Clock = Callable[[], datetime]

SALE_ENTRY_DESCRIPTION = "Venda #{sale_id}"


class Storage(ABC):
    """
    Armazenamento do catálogo (produtos, vendedores) e do livro-caixa
    (vendas, itens, lançamentos).

    Os timestamps de criação são atribuídos pelo próprio armazenamento a partir
    de ``clock`` e nunca decrescem na ordem de inserção.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or datetime.now
        self._last_timestamp: Optional[datetime] = None
        self._timestamp_lock = threading.Lock()

    def _next_timestamp(self) -> datetime:
        with self._timestamp_lock:
            now = self._clock()
            if self._last_timestamp is not None and now < self._last_timestamp:
                now = self._last_timestamp
            self._last_timestamp = now
            return now

    # ==================== CICLO DE VIDA ====================

    def init(self):
        """Preparar o armazenamento (criar schema etc.)"""

    def close(self):
        """Liberar recursos"""

    @abstractmethod
    def has_catalog(self) -> bool:
        """Existe algum produto ou vendedor, ativo ou não"""

    # ==================== PRODUTOS ====================

    @abstractmethod
    def list_products(self) -> List[Product]:
        """Produtos ativos"""

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Produto por id, independente do status"""

    @abstractmethod
    def create_product(self, **fields: Any) -> Product:
        ...

    @abstractmethod
    def update_product(self, product_id: int, **changes: Any) -> Optional[Product]:
        ...

    @abstractmethod
    def delete_product(self, product_id: int) -> bool:
        """Exclusão lógica; False se o produto não existe"""

    # ==================== VENDEDORES ====================

    @abstractmethod
    def list_vendors(self) -> List[Vendor]:
        """Vendedores ativos"""

    @abstractmethod
    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        ...

    @abstractmethod
    def create_vendor(self, **fields: Any) -> Vendor:
        ...

    @abstractmethod
    def update_vendor(self, vendor_id: int, **changes: Any) -> Optional[Vendor]:
        ...

    @abstractmethod
    def delete_vendor(self, vendor_id: int) -> bool:
        ...

    # ==================== VENDAS ====================

    @abstractmethod
    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Sale]:
        """Vendas em [start, end], mais recentes primeiro, com vendedor e itens carregados"""

    @abstractmethod
    def get_sale(self, sale_id: int) -> Optional[Sale]:
        ...

    @abstractmethod
    def create_sale(self, sale: Sale, items: List[SaleItem], entry: CashFlowEntry) -> Sale:
        """
        Gravar venda, itens e lançamento de entrada como uma unidade.

        Os ids e o ``created_at`` são atribuídos aqui; ``entry.description``
        recebe o id da venda. Em caso de falha nada fica visível.
        """

    # ==================== FLUXO DE CAIXA ====================

    @abstractmethod
    def list_cash_flow_entries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[CashFlowEntry]:
        """Lançamentos em [start, end], mais recentes primeiro"""

    @abstractmethod
    def create_cash_flow_entry(self, **fields: Any) -> CashFlowEntry:
        ...


def in_range(moment: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True
