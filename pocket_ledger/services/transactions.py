"""Recording transactions, with loan installments written in the same batch"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pocket_ledger.domain.exceptions import DomainException, DuplicateLoanError, PersistenceError
from pocket_ledger.domain.installments import build_loan_bills, generate_installment_schedule
from pocket_ledger.domain.models import Frequency, LoanTerms
from pocket_ledger.infrastructure.database.models import Bill, Transaction
from pocket_ledger.infrastructure.database.repositories import BillRepository, TransactionRepository
from pocket_ledger.infrastructure.observability.logging import log_loan_scheduled
from pocket_ledger.infrastructure.observability.metrics import persistence_failures_counter

LOAN_CATEGORY = "Loan"
SALARY_CATEGORY = "Salary"


@dataclass
class RecordedTransaction:
    transaction: Transaction
    bills: List[Bill] = field(default_factory=list)


def category_kind(category: str) -> str:
    if category == LOAN_CATEGORY:
        return "loan"
    if category == SALARY_CATEGORY:
        return "salary"
    return "other"


def record_transaction(
    db: Session,
    user_id: str,
    description: str,
    amount_cents: int,
    type: str,
    category: str,
    date: date,
    has_advance: bool = False,
    advance_cents: Optional[int] = None,
    loan: Optional[LoanTerms] = None,
) -> RecordedTransaction:
    """
    Persist a transaction and, for loans, its installment bills as one batch.

    Flow:
    1. Reject a loan id that already has bills for this user (the unique
       constraint on bills catches a concurrent duplicate at flush time)
    2. Stage the transaction
    3. Generate the schedule and stage one bill per installment
    4. Commit once; any failure rolls back both halves

    Raises:
        DuplicateLoanError: Loan id already scheduled for this user
        InvalidScheduleError: Loan parameters cannot produce a schedule
        PersistenceError: Database rejected the batch
    """
    transaction_repo = TransactionRepository(db)
    bill_repo = BillRepository(db)

    # Advance fields only apply to salary deposits
    if category != SALARY_CATEGORY or not has_advance:
        has_advance, advance_cents = False, None

    try:
        if loan is not None and bill_repo.loan_exists(user_id, loan.loan_id):
            raise DuplicateLoanError(f"Loan {loan.loan_id} already has scheduled bills")

        db_transaction = transaction_repo.create_transaction(
            user_id=user_id,
            description=description,
            amount_cents=amount_cents,
            type=type,
            category=category,
            date=date,
            has_advance=has_advance,
            advance_cents=advance_cents,
            loan_details=loan.to_document() if loan is not None else None,
        )

        bills: List[Bill] = []
        if loan is not None:
            schedule = generate_installment_schedule(
                installments=loan.installments,
                frequency=loan.frequency,
                start_date=loan.start_date,
                total_cents=loan.total_cents,
                amounts_cents=loan.amounts_cents,
            )
            drafts = build_loan_bills(user_id, loan.loan_id, schedule)
            bills = bill_repo.create_installment_bills(drafts, transaction_id=db_transaction.id)

        db.commit()

    except DomainException:
        db.rollback()
        raise

    except IntegrityError as e:
        db.rollback()
        if loan is None:
            persistence_failures_counter.labels(operation="record_transaction").inc()
            logging.error(f"Transaction batch rolled back: {e}", extra={"user_id": user_id})
            raise PersistenceError("Could not save transaction") from e
        # Another request scheduled the same loan between the check and the insert
        logging.warning(f"Loan {loan.loan_id} collided with existing bills", extra={"user_id": user_id})
        raise DuplicateLoanError(f"Loan {loan.loan_id} already has scheduled bills") from e

    except SQLAlchemyError as e:
        db.rollback()
        persistence_failures_counter.labels(operation="record_transaction").inc()
        logging.error(f"Transaction batch rolled back: {e}", extra={"user_id": user_id})
        raise PersistenceError("Could not save transaction") from e

    except Exception:
        db.rollback()
        raise

    if loan is not None:
        log_loan_scheduled(user_id, loan.loan_id, len(bills), Frequency(loan.frequency).value)

    return RecordedTransaction(transaction=db_transaction, bills=bills)
