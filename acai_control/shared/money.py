"""
Utilidades de valores monetários.

Todo valor monetário circula como ``Decimal`` e é arredondado para centavos
com ROUND_HALF_UP. Na fronteira HTTP os valores viram strings com duas casas.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Union

CENTS = Decimal("0.01")
QUANTITY_STEP = Decimal("0.001")
RATE_STEP = Decimal("0.0001")
ZERO = Decimal("0.00")

Numberish = Union[Decimal, int, str]


def to_decimal(value: Numberish) -> Decimal:
    """Converte para Decimal sem passar por float"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # float nunca deve chegar aqui; str() evita herdar o erro de representação
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Valor decimal inválido: {value!r}")


def round_money(value: Numberish) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Numberish]) -> Decimal:
    """Soma exata em Decimal, arredondada para centavos ao final"""
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return round_money(total)


def format_money(value: Optional[Numberish]) -> Optional[str]:
    if value is None:
        return None
    return str(round_money(value))


def format_quantity(value: Optional[Numberish]) -> Optional[str]:
    if value is None:
        return None
    return str(to_decimal(value).quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP))


def format_rate(value: Optional[Numberish]) -> Optional[str]:
    if value is None:
        return None
    return str(to_decimal(value).quantize(RATE_STEP, rounding=ROUND_HALF_UP))


def decimal_places(value: Decimal) -> int:
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0
