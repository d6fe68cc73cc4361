from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from acai_control.config.database import Base

# ===== ENUMS =====

class RecordStatus(str, Enum):
    active = "active"
    inactive = "inactive"

class ProductType(str, Enum):
    acai_500ml = "acai-500ml"
    acai_1000ml = "acai-1000ml"
    acai_custom = "acai-custom"
    tapioca_flour = "tapioca-flour"
    cassava_flour = "cassava-flour"

    @property
    def priced_by_volume(self) -> bool:
        return self is ProductType.acai_custom

class PaymentMethod(str, Enum):
    cash = "cash"
    card = "card"
    pix = "pix"
    transfer = "transfer"

class CashFlowType(str, Enum):
    income = "income"
    expense = "expense"


class SoftDeleteMixin:
    """Exclusão lógica: o registro nunca sai da tabela, apenas muda de status"""
    status = Column(String(20), default=RecordStatus.active.value, nullable=False, index=True)

    @property
    def active(self) -> bool:
        return self.status == RecordStatus.active.value

    def deactivate(self):
        self.status = RecordStatus.inactive.value

# ===== CATÁLOGO =====

class Product(SoftDeleteMixin, Base):
    """Modelo de Produto"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    price_per_liter = Column(Numeric(10, 2))  # apenas açaí personalizado

    @property
    def product_type(self) -> ProductType:
        return ProductType(self.type)

    @property
    def effective_price(self):
        """Preço aplicado por unidade vendida (litro para açaí personalizado)"""
        if self.product_type.priced_by_volume:
            return self.price_per_liter
        return self.price

class Vendor(SoftDeleteMixin, Base):
    """Modelo de Vendedor"""
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    commission_rate = Column(Numeric(5, 4), nullable=False)  # 0.1000 = 10%

# ===== VENDAS =====

class Sale(Base):
    """Modelo de Venda - imutável depois de criada"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    subtotal = Column(Numeric(10, 2), nullable=False)
    commission = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    # Relationships
    vendor = relationship("Vendor")
    items = relationship("SaleItem", back_populates="sale", order_by="SaleItem.id")

class SaleItem(Base):
    """Modelo de Item de Venda"""
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Numeric(10, 3), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)  # snapshot do preço no momento da venda
    total = Column(Numeric(10, 2), nullable=False)

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product")

# ===== FLUXO DE CAIXA =====

class CashFlowEntry(Base):
    """Modelo de Lançamento de Caixa"""
    __tablename__ = "cash_flow_entries"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    sale_id = Column(Integer, ForeignKey("sales.id"), index=True)
    created_at = Column(DateTime, nullable=False, index=True)

    # Relationships
    sale = relationship("Sale")
