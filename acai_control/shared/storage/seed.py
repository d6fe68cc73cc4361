import logging
from decimal import Decimal

from acai_control.shared.database.models import ProductType
from .base import Storage

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS = [
    {"name": "Açaí 500ml", "type": ProductType.acai_500ml.value, "price": Decimal("8.50"), "price_per_liter": None},
    {"name": "Açaí 1L", "type": ProductType.acai_1000ml.value, "price": Decimal("15.00"), "price_per_liter": None},
    {"name": "Açaí Personalizado", "type": ProductType.acai_custom.value, "price": Decimal("0.00"), "price_per_liter": Decimal("14.00")},
    {"name": "Farinha de Tapioca", "type": ProductType.tapioca_flour.value, "price": Decimal("4.50"), "price_per_liter": None},
    {"name": "Farinha de Mandioca", "type": ProductType.cassava_flour.value, "price": Decimal("3.80"), "price_per_liter": None},
]

DEFAULT_VENDORS = [
    {"name": "Maria Silva", "commission_rate": Decimal("0.1000")},
    {"name": "João Santos", "commission_rate": Decimal("0.0800")},
    {"name": "Ana Costa", "commission_rate": Decimal("0.1200")},
]


def seed_catalog(storage: Storage) -> bool:
    """Popular o catálogo padrão se ainda não houver produtos nem vendedores"""
    if storage.has_catalog():
        logger.info("Catálogo já populado, seed ignorado")
        return False

    for product in DEFAULT_PRODUCTS:
        storage.create_product(**product)
    for vendor in DEFAULT_VENDORS:
        storage.create_vendor(**vendor)

    logger.info(
        "Catálogo populado: %s produtos, %s vendedores",
        len(DEFAULT_PRODUCTS),
        len(DEFAULT_VENDORS)
    )
    return True
