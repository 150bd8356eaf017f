from fastapi import APIRouter, Query

from ..dependencies import AccessTokensDep, DashboardServiceDep, OptionalAccessTokensDep
from ..schemas import (
    DashboardSummaryResponse,
    MonthlySummaryResponse,
    TotalBalanceResponse,
    YearlySummaryResponse,
)

router = APIRouter()


@router.get("/accounts-total-balance", response_model=TotalBalanceResponse)
def get_total_balance(tokens: AccessTokensDep, dashboard: DashboardServiceDep):
    """Net live balance across all linked accounts"""
    return TotalBalanceResponse(total_balance=dashboard.total_balance(tokens))


@router.get("/analytics/monthly-summary", response_model=MonthlySummaryResponse)
def get_monthly_summary(
    tokens: AccessTokensDep,
    dashboard: DashboardServiceDep,
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
):
    """Income, expenses and savings for one month"""
    summary = dashboard.monthly_summary(tokens, year, month)
    return MonthlySummaryResponse.model_validate(summary)


@router.get("/analytics/yearly-summary", response_model=YearlySummaryResponse)
def get_yearly_summary(
    tokens: AccessTokensDep,
    dashboard: DashboardServiceDep,
    year: int = Query(..., ge=1900, le=9999),
):
    """Income and expenses for one year with a monthly breakdown"""
    summary = dashboard.yearly_summary(tokens, year)
    return YearlySummaryResponse.model_validate(summary)


@router.get("/dashboard/summary", response_model=DashboardSummaryResponse)
def get_dashboard_summary(
    tokens: OptionalAccessTokensDep,
    dashboard: DashboardServiceDep,
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
):
    """Dashboard cards for a month compared with the previous month"""
    return DashboardSummaryResponse.model_validate(dashboard.dashboard(tokens, year, month))
