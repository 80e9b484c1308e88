"""/v1/transactions - record and list income/expense transactions"""

import time
import logging
from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import (
    BillResponse,
    LoanDetailsSchema,
    LoanPreviewResponse,
    ScheduleItem,
    TransactionCreate,
    TransactionCreatedResponse,
    TransactionListResponse,
    TransactionResponse,
)
from pocket_ledger.api.dependencies import get_current_user_id, get_request_id, get_today, parse_record_id
from pocket_ledger.config import settings
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import TransactionRepository
from pocket_ledger.domain.installments import generate_installment_schedule
from pocket_ledger.domain.exceptions import DuplicateLoanError, InvalidScheduleError, PersistenceError
from pocket_ledger.services.transactions import category_kind, record_transaction
from pocket_ledger.infrastructure.observability.metrics import record_transaction as record_transaction_metrics
from pocket_ledger.infrastructure.observability.logging import log_transaction_recorded
from pocket_ledger.utils.date_utils import filter_bounds

router = APIRouter()

FilterType = Literal["all", "today", "month", "date", "range", "recent"]


@router.post("/transactions", response_model=TransactionCreatedResponse, status_code=201)
def create_transaction(
    request_body: TransactionCreate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Record an income/expense transaction.

    Flow:
    1. Validate input (schema rules per field)
    2. For loans, generate the installment schedule
    3. Write the transaction and its bills in one batch
    4. Return the transaction with any generated bills
    """
    start_time = time.time()
    request_id = get_request_id(request)
    loan = request_body.loan_details.to_terms() if request_body.loan_details else None

    try:
        recorded = record_transaction(
            db,
            user_id,
            description=request_body.description,
            amount_cents=request_body.amount_cents,
            type=request_body.type,
            category=request_body.category,
            date=request_body.date,
            has_advance=request_body.has_advance,
            advance_cents=request_body.advance_cents,
            loan=loan,
        )

    except DuplicateLoanError as e:
        logging.warning(f"Duplicate loan: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except InvalidScheduleError as e:
        logging.warning(f"Invalid schedule: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except PersistenceError as e:
        logging.error(f"Persistence error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Could not save transaction, please try again")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    transaction = recorded.transaction
    record_transaction_metrics(
        transaction.type,
        category_kind(transaction.category),
        len(recorded.bills),
        loan.frequency.value if loan else None,
    )
    log_transaction_recorded(
        request_id, user_id, str(transaction.id), transaction.type, len(recorded.bills), duration_ms
    )

    return TransactionCreatedResponse(
        transaction=TransactionResponse.model_validate(transaction),
        bills=[BillResponse.model_validate(b) for b in recorded.bills],
    )


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    filter: FilterType = Query("all", description="all, today, month, date, range or recent"),
    on: Optional[date] = Query(None, description="Day for filter=date"),
    start: Optional[date] = Query(None, description="Range start for filter=range"),
    end: Optional[date] = Query(None, description="Range end for filter=range"),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """List the caller's transactions, newest first"""
    if filter == "date" and on is None:
        raise HTTPException(status_code=422, detail="Query parameter 'on' is required for filter=date")

    lower, upper = filter_bounds(filter, today, on=on, start=start, end=end)
    limit = settings.recent_transactions_limit if filter == "recent" else None

    transactions = TransactionRepository(db).list_transactions(user_id, start=lower, end=upper, limit=limit)

    return TransactionListResponse(
        user_id=user_id,
        filter=filter,
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
    )


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a transaction; bills it generated stay in place"""
    transaction_uuid = parse_record_id(transaction_id, "transaction")

    repo = TransactionRepository(db)
    transaction = repo.get_transaction(user_id, transaction_uuid)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    repo.delete_transaction(transaction)
    db.commit()


@router.post("/transactions/loan-preview", response_model=LoanPreviewResponse)
def preview_loan_schedule(
    loan_details: LoanDetailsSchema,
    user_id: str = Depends(get_current_user_id),
):
    """Installment schedule a loan would generate; nothing is written"""
    terms = loan_details.to_terms()
    try:
        schedule = generate_installment_schedule(
            installments=terms.installments,
            frequency=terms.frequency,
            start_date=terms.start_date,
            total_cents=terms.total_cents,
            amounts_cents=terms.amounts_cents,
        )
    except InvalidScheduleError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return LoanPreviewResponse(
        loan_id=terms.loan_id,
        total_cents=sum(inst.amount_cents for inst in schedule),
        installments=[
            ScheduleItem(
                installment_number=inst.installment_number,
                due_date=inst.due_date,
                amount_cents=inst.amount_cents,
            )
            for inst in schedule
        ],
    )
