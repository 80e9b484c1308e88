"""Card payments: payment row and debt reduction commit together"""

import logging
import uuid
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pocket_ledger.domain.exceptions import (
    DomainException,
    PaymentExceedsDebtError,
    PersistenceError,
    RecordNotFoundError,
)
from pocket_ledger.infrastructure.database.models import Payment
from pocket_ledger.infrastructure.database.repositories import CreditCardRepository
from pocket_ledger.infrastructure.observability.metrics import card_payment_counter, persistence_failures_counter


def record_card_payment(
    db: Session,
    user_id: str,
    card_id: uuid.UUID,
    amount_cents: int,
    paid_on: date,
) -> Payment:
    """
    Apply a payment to a card's outstanding debt.

    Raises:
        RecordNotFoundError: Card missing or owned by another user
        PaymentExceedsDebtError: Payment larger than current debt
        PersistenceError: Database rejected the write
    """
    card_repo = CreditCardRepository(db)
    card = card_repo.get_card(user_id, card_id, for_update=True)
    if card is None:
        raise RecordNotFoundError("Credit card not found")

    try:
        if amount_cents > card.current_debt_cents:
            raise PaymentExceedsDebtError(
                f"Payment of {amount_cents} exceeds current debt of {card.current_debt_cents}"
            )

        payment = card_repo.create_payment(card, amount_cents, paid_on)
        if payment is None:
            # Debt was reduced by another payment after the card was read
            raise PaymentExceedsDebtError(f"Payment of {amount_cents} exceeds current debt")
        db.commit()
    except DomainException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        persistence_failures_counter.labels(operation="card_payment").inc()
        logging.error(f"Card payment rolled back: {e}", extra={"user_id": user_id})
        raise PersistenceError("Could not save payment") from e
    except Exception:
        db.rollback()
        raise

    card_payment_counter.inc()
    return payment
