"""GET /v1/notifications - bills and statements due in the coming days"""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import NotificationsResponse, UpcomingPaymentSchema
from pocket_ledger.api.dependencies import get_current_user_id, get_today
from pocket_ledger.config import settings
from pocket_ledger.domain.notifications import collect_upcoming_payments
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import BillRepository, StatementRepository
from pocket_ledger.utils.date_utils import window_end

router = APIRouter()


@router.get("/notifications", response_model=NotificationsResponse)
def get_notifications(
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    Upcoming payments for the notification bell.

    Returns:
        Bills and unpaid statements due from today through the window end, earliest first
    """
    window_days = settings.notification_window_days
    last_day = window_end(today, window_days)

    bills = BillRepository(db).list_due_between(user_id, today, last_day)
    statements = StatementRepository(db).list_unpaid_due_between(user_id, today, last_day)

    upcoming = collect_upcoming_payments(bills, statements, today, window_days=window_days)

    return NotificationsResponse(
        user_id=user_id,
        window_start=today,
        window_end=last_day,
        upcoming=[
            UpcomingPaymentSchema(
                id=p.id,
                name=p.name,
                due_date=p.due_date,
                kind=p.kind,
                amount_cents=p.amount_cents,
            )
            for p in upcoming
        ],
    )
