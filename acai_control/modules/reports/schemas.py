from acai_control.shared.schemas import ApiModel, Money, Quantity


class DailyStatsResponse(ApiModel):
    total_sales: int
    total_revenue: Money
    total_commissions: Money
    top_vendor: str
    top_product: str

class VendorStatsResponse(ApiModel):
    vendor_id: int
    vendor_name: str
    total_sales: int
    total_revenue: Money
    total_commissions: Money

class ProductStatsResponse(ApiModel):
    product_id: int
    product_name: str
    quantity: Quantity
    revenue: Money
