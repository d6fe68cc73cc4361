# acai_control/modules/sales/service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from acai_control.core.exceptions import (
    AcaiControlError, NotFoundError, PersistenceError, ValidationError
)
from acai_control.shared.database.models import (
    CashFlowEntry, CashFlowType, PaymentMethod, Product, Sale, SaleItem, Vendor
)
from acai_control.shared.money import round_money, sum_money, to_decimal
from acai_control.shared.storage import Storage
from .schemas import SaleCreateRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricedLine:
    product_id: int
    quantity: Decimal
    unit_price: Decimal
    total: Decimal


@dataclass(frozen=True)
class SaleTotals:
    lines: List[PricedLine]
    subtotal: Decimal
    commission: Decimal
    total: Decimal


def resolve_unit_price(product: Product) -> Decimal:
    """Açaí personalizado é vendido por litro; o resto pelo preço unitário"""
    price = product.effective_price
    if price is None:
        raise ValidationError.for_field(
            "items",
            f"Produto {product.id} sem preço para a categoria {product.type}"
        )
    return to_decimal(price)


def compute_sale_totals(
    vendor: Vendor,
    lines: Sequence[Tuple[Product, Decimal]]
) -> SaleTotals:
    """
    Calcular totais da venda.

    - total da linha = round(quantidade x preço, 2)
    - subtotal = soma exata das linhas
    - comissão = round(subtotal x taxa do vendedor, 2)
    - total = subtotal (a comissão é informativa, não é descontada)
    """
    priced = []
    for product, quantity in lines:
        unit_price = resolve_unit_price(product)
        priced.append(PricedLine(
            product_id=product.id,
            quantity=quantity,
            unit_price=unit_price,
            total=round_money(quantity * unit_price)
        ))

    subtotal = sum_money(line.total for line in priced)
    commission = round_money(subtotal * to_decimal(vendor.commission_rate))

    return SaleTotals(lines=priced, subtotal=subtotal, commission=commission, total=subtotal)


class SalesService:
    """
    Registro de vendas: calcula os valores derivados e grava venda, itens e
    lançamento de caixa numa única operação.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    # ==================== REGISTRO DE VENDAS ====================

    def create_sale(self, sale_data: SaleCreateRequest) -> Sale:
        return self.create_sale_from_lines(
            vendor_id=sale_data.vendor_id,
            payment_method=sale_data.payment_method,
            lines=[(item.product_id, item.quantity) for item in sale_data.items]
        )

    def create_sale_from_lines(
        self,
        vendor_id: int,
        payment_method: PaymentMethod,
        lines: Sequence[Tuple[int, Decimal]]
    ) -> Sale:
        """
        Registrar venda completa

        Pré-condições: vendedor e produtos existem (ativos ou não) e toda
        quantidade é positiva. Falhas são devolvidas ao chamador, sem retry.
        """
        if not lines:
            raise ValidationError.for_field("items", "A venda precisa de pelo menos um item")

        # 1. Validar vendedor e produtos
        vendor = self.storage.get_vendor(vendor_id)
        if not vendor:
            logger.warning("Venda recusada: vendedor %s não encontrado", vendor_id)
            raise NotFoundError("Vendedor", vendor_id)

        resolved = self._resolve_lines(lines)

        # 2. Calcular totais
        totals = compute_sale_totals(vendor, resolved)

        # 3. Montar registros
        sale = Sale(
            vendor_id=vendor.id,
            subtotal=totals.subtotal,
            commission=totals.commission,
            total=totals.total,
            payment_method=PaymentMethod(payment_method).value
        )
        items = [
            SaleItem(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total=line.total
            )
            for line in totals.lines
        ]
        entry = CashFlowEntry(
            type=CashFlowType.income.value,
            description="",
            amount=totals.total
        )

        # 4. Gravar tudo ou nada
        try:
            created = self.storage.create_sale(sale, items, entry)
        except AcaiControlError:
            raise
        except Exception as e:
            logger.exception("Erro registrando venda do vendedor %s", vendor_id)
            raise PersistenceError() from e

        logger.info(
            "Venda registrada: id=%s vendedor=%s itens=%s total=%s comissão=%s pagamento=%s",
            created.id,
            vendor.id,
            len(items),
            totals.total,
            totals.commission,
            sale.payment_method
        )
        return created

    def _resolve_lines(self, lines: Sequence[Tuple[int, Decimal]]) -> List[Tuple[Product, Decimal]]:
        resolved = []
        products: Dict[int, Product] = {}
        errors = []

        for index, (product_id, quantity) in enumerate(lines):
            try:
                quantity = to_decimal(quantity)
            except ValueError:
                errors.append({"field": f"items.{index}.quantity", "message": "Quantidade inválida"})
                continue
            if not quantity.is_finite() or quantity <= 0:
                errors.append({"field": f"items.{index}.quantity", "message": "A quantidade deve ser maior que 0"})
                continue

            if product_id not in products:
                product = self.storage.get_product(product_id)
                if not product:
                    logger.warning("Venda recusada: produto %s não encontrado", product_id)
                    raise NotFoundError("Produto", product_id)
                products[product_id] = product

            resolved.append((products[product_id], quantity))

        if errors:
            raise ValidationError("Dados da venda inválidos", errors=errors)
        return resolved

    # ==================== CONSULTAS ====================

    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Sale]:
        return self.storage.list_sales(start, end)

    def get_sale(self, sale_id: int) -> Sale:
        sale = self.storage.get_sale(sale_id)
        if not sale:
            logger.warning("Venda %s não encontrada", sale_id)
            raise NotFoundError("Venda", sale_id, message="Venda não encontrada")
        return sale
