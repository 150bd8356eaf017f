"""Request and response bodies of the HTTP API (camelCase on the wire)."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class LinkTokenRequest(ApiModel):
    user_id: str = Field(..., min_length=1)


class LinkTokenResponse(ApiModel):
    link_token: str


class PublicTokenRequest(ApiModel):
    public_token: str = Field(..., min_length=1)


class TokenExchangeResponse(ApiModel):
    access_token: str
    item_id: str


class BalanceOut(ApiModel):
    available: float | None = None
    current: float | None = None
    limit: float | None = None
    iso_currency_code: str | None = None


class AccountOut(ApiModel):
    account_id: str
    name: str
    official_name: str | None = None
    mask: str | None = None
    type: str
    subtype: str | None = None
    balances: BalanceOut


class TransactionOut(ApiModel):
    transaction_id: str
    account_id: str
    amount: float
    date: dt.date
    name: str | None = None
    merchant_name: str | None = None
    category: list[str] = Field(default_factory=list)
    iso_currency_code: str | None = None
    pending: bool = False


class TotalBalanceResponse(ApiModel):
    total_balance: float


class CategoryAmountOut(ApiModel):
    category: str
    amount: float


class MonthlySummaryResponse(ApiModel):
    income: float
    expenses: float
    savings: float
    categorized_expenses: list[CategoryAmountOut] = Field(default_factory=list)


class MonthBreakdownOut(ApiModel):
    month: int
    income: float
    expenses: float


class YearlySummaryResponse(ApiModel):
    income: float
    expenses: float
    savings: float
    monthly_breakdown: list[MonthBreakdownOut] = Field(default_factory=list)


class DashboardSummaryResponse(ApiModel):
    income: float
    expenses: float
    savings: float
    balance: float
    income_change: float
    expenses_change: float
    savings_change: float
    balance_change: float
    balance_change_is_estimate: bool
    unavailable: list[str] = Field(default_factory=list)
