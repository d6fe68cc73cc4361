from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from acai_control.shared.money import decimal_places, format_money, format_quantity, format_rate

# ==================== TIPOS DE SAÍDA ====================
# Decimais saem sempre como string para não perder precisão no JSON

Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str)]
Quantity = Annotated[Decimal, PlainSerializer(format_quantity, return_type=str)]
Rate = Annotated[Decimal, PlainSerializer(format_rate, return_type=str)]

# ==================== TIPOS DE ENTRADA ====================

def _check_places(places: int):
    def validator(value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("Valor decimal inválido")
        if decimal_places(value) > places:
            raise ValueError(f"Use no máximo {places} casas decimais")
        return value
    return validator


MoneyInput = Annotated[Decimal, AfterValidator(_check_places(2))]
QuantityInput = Annotated[Decimal, AfterValidator(_check_places(3))]
RateInput = Annotated[Decimal, AfterValidator(_check_places(4))]

# ==================== CLASSE BASE ====================

class ApiModel(BaseModel):
    """
    Base de todos os esquemas da API: camelCase no JSON, snake_case no Python,
    leitura direta dos modelos ORM.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )
