"""Pydantic schemas for Plaid API responses used by the dashboard.

Plaid SDK model objects are validated directly (``from_attributes``); plain
dicts with the same keys are accepted as well.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        use_enum_values=True,
        str_strip_whitespace=True,
        from_attributes=True,
        populate_by_name=True,
    )


def _enum_to_str(v: Any) -> Any:
    """Convert Plaid SDK enum-like values (ModelSimple or Enum) to strings."""
    if v is None:
        return None
    if isinstance(v, Enum):
        return v.value
    value = getattr(v, "value", None)
    if isinstance(value, str):
        return value
    return str(v)


class BalanceSchema(BaseSchema):
    """Schema for account balance information."""

    available: Decimal | None = Field(None, description="Available balance")
    current: Decimal | None = Field(None, description="Current balance")
    limit: Decimal | None = Field(None, description="Credit limit or overdraft limit")
    iso_currency_code: str | None = Field(None, max_length=3)


class AccountRecord(BaseSchema):
    """One account of a linked institution."""

    account_id: str = Field(..., description="Plaid account ID")
    balances: BalanceSchema
    mask: str | None = Field(None, max_length=4)
    name: str = Field(..., description="Account name")
    official_name: str | None = None
    subtype: str | None = None
    type: str

    @field_validator("type", "subtype", mode="before")
    @classmethod
    def coerce_account_enums(cls, v: Any) -> Any:
        """Accept Plaid SDK enum or string and convert to string."""
        return _enum_to_str(v)


class TransactionRecord(BaseSchema):
    """One transaction as returned by Plaid.

    Amounts follow Plaid's sign convention: positive values are money moving
    out of the account, negative values are money coming in.
    """

    transaction_id: str = Field(..., description="Plaid transaction ID")
    account_id: str = Field(..., description="Associated account ID")
    amount: Decimal = Field(..., description="Transaction amount")
    iso_currency_code: str | None = Field(None, max_length=3)
    transaction_date: date = Field(..., description="Transaction date", alias="date")

    name: str | None = None
    merchant_name: str | None = None

    category: list[str] = Field(default_factory=list)
    personal_finance_category: dict[str, Any] | None = None

    pending: bool = False

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Ensure category is a list of strings; Plaid may return None."""
        if v is None:
            return []
        if isinstance(v, list):
            items = cast(list[object], v)
            return [str(x) for x in items]
        return [str(v)]

    @field_validator("personal_finance_category", mode="before")
    @classmethod
    def coerce_personal_finance_category(cls, v: Any) -> Any:
        """Convert Plaid SDK PersonalFinanceCategory objects into dicts."""
        if v is None or isinstance(v, dict):
            return v
        to_dict = getattr(v, "to_dict", None)
        if callable(to_dict):
            converted = to_dict()
            return converted if isinstance(converted, dict) else None
        return None

    @property
    def description(self) -> str:
        """Merchant name, falling back to the raw transaction name."""
        return self.merchant_name or self.name or ""


class TokenExchangeResult(BaseSchema):
    """Result of exchanging a Plaid Link public token."""

    access_token: str = Field(..., min_length=1)
    item_id: str = Field(..., min_length=1)


class TransactionsPage(BaseSchema):
    """One page of a ``/transactions/get`` response."""

    transactions: list[TransactionRecord] = Field(default_factory=list)
    total_transactions: int = Field(..., ge=0)


class DateRange(BaseSchema):
    """Inclusive date window for transaction queries."""

    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        """Reject windows that end before they start."""
        if self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date.isoformat()} is after "
                f"end_date {self.end_date.isoformat()}"
            )
        return self
