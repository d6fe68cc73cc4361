# tests/test_api.py

from datetime import datetime

# Catálogo semeado: produtos 1..5 e vendedores 1..3 (ver shared/storage/seed.py)
ACAI_500 = 1
ACAI_CUSTOM = 3
TAPIOCA = 4
MARIA = 1
JOAO = 2


def _create_sale(client, vendor_id=MARIA, items=None, payment_method="cash"):
    return client.post("/api/sales", json={
        "vendorId": vendor_id,
        "paymentMethod": payment_method,
        "items": items or [{"productId": ACAI_500, "quantity": 2}],
    })


# ==================== INFRA ====================

def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"

    health = client.get("/api/health").json()
    assert health["status"] == "healthy"
    assert health["storage"] == "MemoryStorage"


# ==================== CATÁLOGO ====================

def test_seeded_products_are_listed_with_string_prices(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    products = {p["name"]: p for p in response.json()}
    assert products["Açaí 500ml"]["price"] == "8.50"
    assert products["Açaí 500ml"]["pricePerLiter"] is None
    assert products["Açaí Personalizado"]["pricePerLiter"] == "14.00"
    assert products["Açaí Personalizado"]["type"] == "acai-custom"


def test_create_product_requires_price_for_its_category(client):
    response = client.post("/api/products", json={"name": "Açaí Grande", "type": "acai-custom", "price": "10.00"})
    assert response.status_code == 400
    assert response.json()["errors"]

    response = client.post("/api/products", json={"name": "Açaí 300ml", "type": "acai-500ml"})
    assert response.status_code == 400

    response = client.post("/api/products", json={"name": "Açaí 300ml", "type": "acai-500ml", "price": "6.00"})
    assert response.status_code == 201
    assert response.json()["price"] == "6.00"
    assert response.json()["active"] is True


def test_create_custom_product_defaults_unit_price(client):
    response = client.post("/api/products", json={
        "name": "Açaí Zero", "type": "acai-custom", "pricePerLiter": "16.00"
    })

    assert response.status_code == 201
    body = response.json()
    assert body["price"] == "0.00"
    assert body["pricePerLiter"] == "16.00"


def test_unknown_product_type_is_a_field_error(client):
    response = client.post("/api/products", json={"name": "Pão", "type": "bread", "price": "1.00"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "type"


def test_update_and_soft_delete_product(client):
    response = client.patch(f"/api/products/{TAPIOCA}", json={"price": "5.00"})
    assert response.status_code == 200
    assert response.json()["price"] == "5.00"

    response = client.delete(f"/api/products/{TAPIOCA}")
    assert response.status_code == 204
    assert response.content == b""

    assert TAPIOCA not in [p["id"] for p in client.get("/api/products").json()]
    detail = client.get(f"/api/products/{TAPIOCA}").json()
    assert detail["active"] is False
    assert detail["status"] == "inactive"


def test_custom_product_switched_to_fixed_price_needs_a_price(client):
    response = client.patch(f"/api/products/{ACAI_CUSTOM}", json={"type": "acai-500ml"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "price"
    assert client.get(f"/api/products/{ACAI_CUSTOM}").json()["type"] == "acai-custom"

    response = client.patch(f"/api/products/{ACAI_CUSTOM}", json={"type": "acai-500ml", "price": "9.00"})
    assert response.status_code == 200
    assert response.json()["price"] == "9.00"
    assert response.json()["pricePerLiter"] is None

    sale = _create_sale(client, items=[{"productId": ACAI_CUSTOM, "quantity": 3}]).json()
    assert sale["total"] == "27.00"


def test_missing_catalog_records_are_404(client):
    assert client.get("/api/products/999").status_code == 404
    assert client.patch("/api/products/999", json={"name": "x"}).status_code == 404
    assert client.delete("/api/products/999").status_code == 404
    assert client.get("/api/vendors/999").status_code == 404
    assert client.delete("/api/vendors/999").status_code == 404
    assert client.get("/api/vendors/999").json()["message"] == "Vendedor não encontrado"


def test_vendor_commission_rate_must_be_a_fraction(client):
    response = client.post("/api/vendors", json={"name": "Pedro", "commissionRate": "1.5"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "commissionRate"

    response = client.post("/api/vendors", json={"name": "Pedro", "commissionRate": "0.05"})
    assert response.status_code == 201
    assert response.json()["commissionRate"] == "0.0500"


def test_null_required_field_on_update_is_rejected(client):
    response = client.patch(f"/api/vendors/{MARIA}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "name", "message": "Campo obrigatório não pode ser nulo"}]


# ==================== VENDAS ====================

def test_create_sale_end_to_end(client):
    response = _create_sale(client)

    assert response.status_code == 201
    sale = response.json()
    assert sale["subtotal"] == "17.00"
    assert sale["commission"] == "1.70"
    assert sale["total"] == "17.00"
    assert sale["paymentMethod"] == "cash"
    assert sale["vendor"]["name"] == "Maria Silva"
    assert sale["items"][0]["quantity"] == "2.000"
    assert sale["items"][0]["unitPrice"] == "8.50"
    assert sale["items"][0]["product"]["name"] == "Açaí 500ml"

    entries = client.get("/api/cashflow").json()
    linked = [e for e in entries if e["saleId"] == sale["id"]]
    assert len(linked) == 1
    assert linked[0]["type"] == "income"
    assert linked[0]["amount"] == "17.00"


def test_create_sale_custom_volume(client):
    response = _create_sale(client, items=[{"productId": ACAI_CUSTOM, "quantity": "1.5"}])

    assert response.status_code == 201
    assert response.json()["items"][0]["total"] == "21.00"


def test_sale_validation_errors_are_400_and_write_nothing(client):
    bad_payloads = [
        {"vendorId": MARIA, "paymentMethod": "cash", "items": []},
        {"vendorId": MARIA, "paymentMethod": "cheque", "items": [{"productId": ACAI_500, "quantity": 1}]},
        {"vendorId": MARIA, "paymentMethod": "cash", "items": [{"productId": ACAI_500, "quantity": 0}]},
        {"vendorId": MARIA, "paymentMethod": "cash", "items": [{"productId": ACAI_500, "quantity": "abc"}]},
        {"paymentMethod": "cash", "items": [{"productId": ACAI_500, "quantity": 1}]},
    ]

    for payload in bad_payloads:
        response = client.post("/api/sales", json=payload)
        assert response.status_code == 400, payload
        assert response.json()["errors"], payload

    assert client.get("/api/sales").json() == []
    assert client.get("/api/cashflow").json() == []


def test_sale_error_points_at_the_offending_field(client):
    response = _create_sale(client, items=[{"productId": ACAI_500, "quantity": -2}])

    assert response.json()["errors"][0]["field"] == "items.0.quantity"


def test_sale_with_unknown_references_is_404(client):
    assert _create_sale(client, vendor_id=999).status_code == 404
    assert _create_sale(client, items=[{"productId": 999, "quantity": 1}]).status_code == 404
    assert client.get("/api/cashflow").json() == []


def test_get_sale_by_id(client):
    sale_id = _create_sale(client).json()["id"]

    response = client.get(f"/api/sales/{sale_id}")
    assert response.status_code == 200
    assert response.json()["id"] == sale_id

    missing = client.get("/api/sales/999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Venda não encontrada"}


def test_list_sales_by_date_range(client, clock):
    clock.set(datetime(2024, 3, 10, 12, 0))
    old_id = _create_sale(client).json()["id"]
    clock.set(datetime(2024, 3, 15, 18, 30))
    new_id = _create_sale(client, vendor_id=JOAO).json()["id"]

    all_ids = [s["id"] for s in client.get("/api/sales").json()]
    assert all_ids == [new_id, old_id]

    ranged = client.get("/api/sales", params={"startDate": "2024-03-15", "endDate": "2024-03-15"}).json()
    assert [s["id"] for s in ranged] == [new_id]

    until = client.get("/api/sales", params={"endDate": "2024-03-10"}).json()
    assert [s["id"] for s in until] == [old_id]


def test_soft_deleted_product_stays_in_sale_history(client):
    sale_id = _create_sale(client).json()["id"]

    client.patch(f"/api/products/{ACAI_500}", json={"price": "12.00"})
    client.delete(f"/api/products/{ACAI_500}")

    item = client.get(f"/api/sales/{sale_id}").json()["items"][0]
    assert item["unitPrice"] == "8.50"
    assert item["product"]["id"] == ACAI_500
    assert item["product"]["active"] is False


# ==================== RELATÓRIOS ====================

def test_daily_stats_without_sales(client):
    response = client.get("/api/reports/daily-stats", params={"date": "2024-03-15"})

    assert response.status_code == 200
    assert response.json() == {
        "totalSales": 0,
        "totalRevenue": "0.00",
        "totalCommissions": "0.00",
        "topVendor": "N/A",
        "topProduct": "N/A",
    }


def test_daily_stats_defaults_to_today(client):
    _create_sale(client)
    _create_sale(client, vendor_id=JOAO, items=[{"productId": TAPIOCA, "quantity": 3}])
    _create_sale(client, vendor_id=JOAO, items=[{"productId": ACAI_CUSTOM, "quantity": "0.5"}])

    stats = client.get("/api/reports/daily-stats").json()

    assert stats["totalSales"] == 3
    assert stats["totalRevenue"] == "37.50"
    # 1.70 + 1.08 + 0.56
    assert stats["totalCommissions"] == "3.34"
    assert stats["topVendor"] == "João Santos"
    assert stats["topProduct"] == "Farinha de Tapioca"


def test_vendor_stats_endpoint(client):
    _create_sale(client)
    _create_sale(client, items=[{"productId": TAPIOCA, "quantity": 1}])

    rows = client.get("/api/reports/vendor-stats", params={"startDate": "2024-03-15"}).json()

    assert rows == [{
        "vendorId": MARIA,
        "vendorName": "Maria Silva",
        "totalSales": 2,
        "totalRevenue": "21.50",
        "totalCommissions": "2.15",
    }]
    assert client.get("/api/reports/vendor-stats", params={"startDate": "2024-03-16"}).json() == []


def test_product_stats_endpoint(client):
    _create_sale(client, items=[{"productId": ACAI_500, "quantity": 1}, {"productId": TAPIOCA, "quantity": 4}])

    rows = client.get("/api/reports/product-stats", params={"limit": 1}).json()

    assert rows == [{
        "productId": TAPIOCA,
        "productName": "Farinha de Tapioca",
        "quantity": "4.000",
        "revenue": "18.00",
    }]


def test_invalid_report_dates_are_400(client):
    response = client.get("/api/reports/daily-stats", params={"date": "ontem"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "date"


# ==================== FLUXO DE CAIXA ====================

def test_manual_cash_flow_entry_and_summary(client):
    _create_sale(client)
    response = client.post("/api/cashflow", json={
        "type": "expense", "description": "Compra de polpa", "amount": "20.50", "saleId": 1
    })

    assert response.status_code == 201
    entry = response.json()
    assert entry["amount"] == "20.50"
    assert entry["saleId"] is None

    summary = client.get("/api/cashflow/summary").json()
    assert summary == {
        "totalIncome": "17.00",
        "totalExpenses": "20.50",
        "netFlow": "-3.50",
        "incomeCount": 1,
        "expenseCount": 1,
    }


def test_cash_flow_entry_rejects_negative_amount(client):
    response = client.post("/api/cashflow", json={"type": "income", "description": "x", "amount": "-5"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "amount"
