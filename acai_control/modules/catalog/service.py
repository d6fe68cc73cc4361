# acai_control/modules/catalog/service.py
import logging
from typing import List

from pydantic.alias_generators import to_camel

from acai_control.core.exceptions import NotFoundError, ValidationError
from acai_control.shared.database.models import Product, ProductType, Vendor
from acai_control.shared.money import ZERO
from acai_control.shared.storage import Storage
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest,
    VendorCreateRequest, VendorUpdateRequest
)

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Gestão de produtos e vendedores. Exclusão é sempre lógica: vendas
    antigas continuam apontando para o registro.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    # ==================== PRODUTOS ====================

    def list_products(self) -> List[Product]:
        return self.storage.list_products()

    def get_product(self, product_id: int) -> Product:
        product = self.storage.get_product(product_id)
        if not product:
            logger.warning("Produto %s não encontrado", product_id)
            raise NotFoundError("Produto", product_id)
        return product

    def create_product(self, data: ProductCreateRequest) -> Product:
        fields = data.model_dump()
        fields["type"] = data.type.value
        if data.type.priced_by_volume and fields["price"] is None:
            # coluna obrigatória; o preço efetivo é o preço por litro
            fields["price"] = ZERO

        product = self.storage.create_product(**fields)
        logger.info("Produto criado: id=%s nome=%s tipo=%s", product.id, product.name, product.type)
        return product

    def update_product(self, product_id: int, data: ProductUpdateRequest) -> Product:
        changes = data.model_dump(exclude_unset=True)
        if "type" in changes and changes["type"] is not None:
            changes["type"] = ProductType(changes["type"]).value
        self._check_nullable(changes, ["name", "type", "price"])

        current = self.get_product(product_id)
        self._check_pricing(current, changes)

        product = self.storage.update_product(product_id, **changes)
        if not product:
            raise NotFoundError("Produto", product_id)
        logger.info("Produto %s atualizado: %s", product_id, sorted(changes))
        return product

    def delete_product(self, product_id: int):
        if not self.storage.delete_product(product_id):
            logger.warning("Produto %s não encontrado para exclusão", product_id)
            raise NotFoundError("Produto", product_id)
        logger.info("Produto %s desativado", product_id)

    def _check_pricing(self, current: Product, changes: dict):
        """O preço autoritativo depende da categoria resultante"""
        product_type = ProductType(changes.get("type", current.type))
        price_per_liter = changes.get("price_per_liter", current.price_per_liter)

        if product_type.priced_by_volume and price_per_liter is None:
            raise ValidationError.for_field(
                "pricePerLiter", "Açaí personalizado exige preço por litro"
            )
        if not product_type.priced_by_volume and changes.get("price_per_liter") is not None:
            raise ValidationError.for_field(
                "pricePerLiter", "Preço por litro só se aplica ao açaí personalizado"
            )
        if not product_type.priced_by_volume and ProductType(current.type).priced_by_volume:
            # mudou de personalizado para preço fixo: o preço 0.00 guardado não vale
            if changes.get("price") is None:
                raise ValidationError.for_field(
                    "price", "Produto de preço fixo exige preço unitário"
                )
            changes["price_per_liter"] = None

    # ==================== VENDEDORES ====================

    def list_vendors(self) -> List[Vendor]:
        return self.storage.list_vendors()

    def get_vendor(self, vendor_id: int) -> Vendor:
        vendor = self.storage.get_vendor(vendor_id)
        if not vendor:
            logger.warning("Vendedor %s não encontrado", vendor_id)
            raise NotFoundError("Vendedor", vendor_id)
        return vendor

    def create_vendor(self, data: VendorCreateRequest) -> Vendor:
        vendor = self.storage.create_vendor(**data.model_dump())
        logger.info("Vendedor criado: id=%s nome=%s", vendor.id, vendor.name)
        return vendor

    def update_vendor(self, vendor_id: int, data: VendorUpdateRequest) -> Vendor:
        changes = data.model_dump(exclude_unset=True)
        self._check_nullable(changes, ["name", "commission_rate"])

        vendor = self.storage.update_vendor(vendor_id, **changes)
        if not vendor:
            logger.warning("Vendedor %s não encontrado", vendor_id)
            raise NotFoundError("Vendedor", vendor_id)
        logger.info("Vendedor %s atualizado: %s", vendor_id, sorted(changes))
        return vendor

    def delete_vendor(self, vendor_id: int):
        if not self.storage.delete_vendor(vendor_id):
            logger.warning("Vendedor %s não encontrado para exclusão", vendor_id)
            raise NotFoundError("Vendedor", vendor_id)
        logger.info("Vendedor %s desativado", vendor_id)

    @staticmethod
    def _check_nullable(changes: dict, required: List[str]):
        errors = [
            {"field": to_camel(field), "message": "Campo obrigatório não pode ser nulo"}
            for field in required
            if field in changes and changes[field] is None
        ]
        if errors:
            raise ValidationError("Dados inválidos", errors=errors)
