from datetime import datetime
from typing import List

from pydantic import Field

from acai_control.modules.catalog.schemas import ProductResponse, VendorResponse
from acai_control.shared.database.models import PaymentMethod
from acai_control.shared.schemas import ApiModel, Money, Quantity, QuantityInput

# ==================== REQUEST SCHEMAS ====================

class SaleItemRequest(ApiModel):
    product_id: int = Field(..., description="Id do produto")
    quantity: QuantityInput = Field(..., gt=0, description="Quantidade (litros para açaí personalizado)")

class SaleCreateRequest(ApiModel):
    vendor_id: int = Field(..., description="Id do vendedor")
    payment_method: PaymentMethod = Field(..., description="Forma de pagamento")
    items: List[SaleItemRequest] = Field(..., min_length=1, description="Itens da venda")

# ==================== RESPONSE SCHEMAS ====================

class SaleItemResponse(ApiModel):
    id: int
    sale_id: int
    product_id: int
    quantity: Quantity
    unit_price: Money
    total: Money

    product: ProductResponse

class SaleResponse(ApiModel):
    id: int
    vendor_id: int
    subtotal: Money
    commission: Money
    total: Money
    payment_method: str
    created_at: datetime

    # Relacionados
    vendor: VendorResponse
    items: List[SaleItemResponse]
