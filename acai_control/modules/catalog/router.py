# acai_control/modules/catalog/router.py
from fastapi import APIRouter, Depends, Response
from typing import List

from acai_control.api.dependencies import get_storage
from acai_control.shared.storage import Storage
from .service import CatalogService
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse,
    VendorCreateRequest, VendorUpdateRequest, VendorResponse
)

products_router = APIRouter(prefix="/products", tags=["Catálogo - Produtos"])
vendors_router = APIRouter(prefix="/vendors", tags=["Catálogo - Vendedores"])

# ==================== PRODUTOS ====================

@products_router.get("", response_model=List[ProductResponse])
async def list_products(storage: Storage = Depends(get_storage)):
    """
    Listar produtos ativos
    """
    return CatalogService(storage).list_products()

@products_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, storage: Storage = Depends(get_storage)):
    """
    Obter produto por id, inclusive desativado
    """
    return CatalogService(storage).get_product(product_id)

@products_router.post("", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreateRequest, storage: Storage = Depends(get_storage)):
    """
    Cadastrar produto

    - Açaí personalizado: informar **pricePerLiter**
    - Demais categorias: informar **price**
    """
    return CatalogService(storage).create_product(data)

@products_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductUpdateRequest,
    storage: Storage = Depends(get_storage)
):
    return CatalogService(storage).update_product(product_id, data)

@products_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: int, storage: Storage = Depends(get_storage)):
    """
    Desativar produto (exclusão lógica; vendas antigas não são afetadas)
    """
    CatalogService(storage).delete_product(product_id)
    return Response(status_code=204)

# ==================== VENDEDORES ====================

@vendors_router.get("", response_model=List[VendorResponse])
async def list_vendors(storage: Storage = Depends(get_storage)):
    """
    Listar vendedores ativos
    """
    return CatalogService(storage).list_vendors()

@vendors_router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(vendor_id: int, storage: Storage = Depends(get_storage)):
    return CatalogService(storage).get_vendor(vendor_id)

@vendors_router.post("", response_model=VendorResponse, status_code=201)
async def create_vendor(data: VendorCreateRequest, storage: Storage = Depends(get_storage)):
    """
    Cadastrar vendedor com taxa de comissão entre 0 e 1
    """
    return CatalogService(storage).create_vendor(data)

@vendors_router.patch("/{vendor_id}", response_model=VendorResponse)
async def update_vendor(
    vendor_id: int,
    data: VendorUpdateRequest,
    storage: Storage = Depends(get_storage)
):
    """
    Atualizar vendedor. Mudar a comissão não altera vendas já registradas.
    """
    return CatalogService(storage).update_vendor(vendor_id, data)

@vendors_router.delete("/{vendor_id}", status_code=204)
async def delete_vendor(vendor_id: int, storage: Storage = Depends(get_storage)):
    CatalogService(storage).delete_vendor(vendor_id)
    return Response(status_code=204)
