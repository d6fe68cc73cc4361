from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from acai_control.shared.database.models import CashFlowType
from acai_control.shared.schemas import ApiModel, Money, MoneyInput

# ==================== REQUEST SCHEMAS ====================

class CashFlowEntryCreateRequest(ApiModel):
    type: CashFlowType = Field(..., description="Entrada (income) ou saída (expense)")
    description: str = Field(..., description="Descrição do lançamento")
    amount: MoneyInput = Field(..., ge=0, description="Valor; o sinal vem do tipo")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str):
        if not v or not v.strip():
            raise ValueError("Este campo não pode estar vazio")
        return v.strip()

# ==================== RESPONSE SCHEMAS ====================

class CashFlowEntryResponse(ApiModel):
    id: int
    type: str
    description: str
    amount: Money
    sale_id: Optional[int]
    created_at: datetime

class CashFlowSummaryResponse(ApiModel):
    total_income: Money
    total_expenses: Money
    net_flow: Money
    income_count: int
    expense_count: int
