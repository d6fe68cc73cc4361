from typing import Optional

from pydantic import Field, model_validator

from acai_control.shared.database.models import ProductType
from acai_control.shared.schemas import ApiModel, Money, MoneyInput, Rate, RateInput

# ==================== REQUEST SCHEMAS ====================

class ProductCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, description="Nome do produto")
    type: ProductType = Field(..., description="Categoria do produto")
    price: Optional[MoneyInput] = Field(None, ge=0, description="Preço unitário")
    price_per_liter: Optional[MoneyInput] = Field(None, gt=0, description="Preço por litro (açaí personalizado)")

    @model_validator(mode="after")
    def validate_pricing(self):
        if self.type.priced_by_volume:
            if self.price_per_liter is None:
                raise ValueError("Açaí personalizado exige preço por litro")
        else:
            if self.price is None:
                raise ValueError("Produto de preço fixo exige preço unitário")
            if self.price_per_liter is not None:
                raise ValueError("Preço por litro só se aplica ao açaí personalizado")
        return self

class ProductUpdateRequest(ApiModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[ProductType] = None
    price: Optional[MoneyInput] = Field(None, ge=0)
    price_per_liter: Optional[MoneyInput] = Field(None, gt=0)

class VendorCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, description="Nome do vendedor")
    commission_rate: RateInput = Field(..., ge=0, le=1, description="Taxa de comissão (0.1000 = 10%)")

class VendorUpdateRequest(ApiModel):
    name: Optional[str] = Field(None, min_length=1)
    commission_rate: Optional[RateInput] = Field(None, ge=0, le=1)

# ==================== RESPONSE SCHEMAS ====================

class ProductResponse(ApiModel):
    id: int
    name: str
    type: str
    price: Money
    price_per_liter: Optional[Money]
    status: str
    active: bool

class VendorResponse(ApiModel):
    id: int
    name: str
    commission_rate: Rate
    status: str
    active: bool
