"""GET /v1/dashboard and /v1/reports/monthly - balance rollups"""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import (
    DashboardResponse,
    MonthlyBalanceSchema,
    MonthlyFlowSchema,
    ReportResponse,
)
from pocket_ledger.api.dependencies import get_current_user_id, get_today
from pocket_ledger.config import settings
from pocket_ledger.domain.models import LedgerEntry
from pocket_ledger.domain.reports import monthly_balance_history, monthly_income_expense, summarize_balances
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import CreditCardRepository, TransactionRepository
from pocket_ledger.utils.date_utils import last_n_month_starts

router = APIRouter()


def _ledger_entries(transactions) -> list[LedgerEntry]:
    return [LedgerEntry(date=t.date, amount_cents=t.amount_cents, type=t.type) for t in transactions]


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Headline balances plus month-end balance history"""
    entries = _ledger_entries(TransactionRepository(db).list_transactions(user_id))
    cards = CreditCardRepository(db).list_cards(user_id)

    summary = summarize_balances(entries, [c.current_debt_cents for c in cards])
    history = monthly_balance_history(entries, today, months=settings.report_months)

    return DashboardResponse(
        total_balance_cents=summary.total_balance_cents,
        checking_cents=summary.checking_cents,
        savings_cents=summary.savings_cents,
        credit_card_cents=summary.credit_card_cents,
        history=[MonthlyBalanceSchema(month=h.month, balance_cents=h.balance_cents) for h in history],
    )


@router.get("/reports/monthly", response_model=ReportResponse)
def get_monthly_report(
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Income vs expenses for each of the last report_months months"""
    since = last_n_month_starts(today, settings.report_months)[0]
    transactions = TransactionRepository(db).list_transactions(user_id, start=since)

    report = monthly_income_expense(_ledger_entries(transactions), today, months=settings.report_months)

    return ReportResponse(
        total_income_cents=report.total_income_cents,
        total_expense_cents=report.total_expense_cents,
        net_flow_cents=report.net_flow_cents,
        months=[
            MonthlyFlowSchema(month=m.month, income_cents=m.income_cents, expense_cents=m.expense_cents)
            for m in report.months
        ],
    )
