"""/v1/credit-cards and /v1/statements - card balances, statements and payments"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import (
    CreditCardCreate,
    CreditCardResponse,
    PaymentCreate,
    PaymentResponse,
    StatementCreate,
    StatementResponse,
)
from pocket_ledger.api.dependencies import get_current_user_id, get_request_id, get_today, parse_record_id
from pocket_ledger.domain.exceptions import PaymentExceedsDebtError, PersistenceError, RecordNotFoundError
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import CreditCardRepository, StatementRepository
from pocket_ledger.services.cards import record_card_payment

router = APIRouter()


def _get_owned_card(db: Session, user_id: str, card_id: str):
    card = CreditCardRepository(db).get_card(user_id, parse_record_id(card_id, "card"))
    if not card:
        raise HTTPException(status_code=404, detail="Credit card not found")
    return card


@router.post("/credit-cards", response_model=CreditCardResponse, status_code=201)
def create_card(
    request_body: CreditCardCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = CreditCardRepository(db).create_card(
        user_id=user_id,
        card_name=request_body.card_name,
        bank=request_body.bank,
        credit_limit_cents=request_body.credit_limit_cents,
        current_debt_cents=request_body.current_debt_cents,
        last_four_digits=request_body.last_four_digits,
    )
    db.commit()
    return CreditCardResponse.model_validate(card)


@router.get("/credit-cards", response_model=list[CreditCardResponse])
def list_cards(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Cards with their usage percentage (debt / limit)"""
    cards = CreditCardRepository(db).list_cards(user_id)
    return [CreditCardResponse.model_validate(c) for c in cards]


@router.post("/credit-cards/{card_id}/payments", response_model=PaymentResponse, status_code=201)
def create_payment(
    card_id: str,
    request_body: PaymentCreate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    Pay towards a card's debt.

    The payment row and the reduced debt are committed together.
    """
    card_uuid = parse_record_id(card_id, "card")
    request_id = get_request_id(request)

    try:
        payment = record_card_payment(
            db,
            user_id,
            card_uuid,
            amount_cents=request_body.amount_cents,
            paid_on=request_body.paid_on or today,
        )
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentExceedsDebtError as e:
        logging.warning(f"Rejected card payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceError as e:
        logging.error(f"Persistence error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Could not save payment, please try again")

    return PaymentResponse(
        payment_id=payment.id,
        card_id=payment.card_id,
        amount_cents=payment.amount_cents,
        paid_on=payment.paid_on,
        remaining_debt_cents=payment.card.current_debt_cents,
    )


@router.post("/credit-cards/{card_id}/statements", response_model=StatementResponse, status_code=201)
def create_statement(
    card_id: str,
    request_body: StatementCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = _get_owned_card(db, user_id, card_id)
    statement = StatementRepository(db).create_statement(
        card,
        month=request_body.month,
        statement_balance_cents=request_body.statement_balance_cents,
        minimum_payment_cents=request_body.minimum_payment_cents,
        payment_for_no_interest_cents=request_body.payment_for_no_interest_cents,
        due_date=request_body.due_date,
        is_paid=request_body.is_paid,
    )
    db.commit()
    return StatementResponse.model_validate(statement)


@router.get("/credit-cards/{card_id}/statements", response_model=list[StatementResponse])
def list_statements(
    card_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Statements of one card, latest due date first"""
    card = _get_owned_card(db, user_id, card_id)
    statements = StatementRepository(db).list_for_card(card)
    return [StatementResponse.model_validate(s) for s in statements]


@router.post("/statements/{statement_id}/pay", response_model=StatementResponse)
def pay_statement(
    statement_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    statement = StatementRepository(db).get_statement(user_id, parse_record_id(statement_id, "statement"))
    if not statement:
        raise HTTPException(status_code=404, detail="Statement not found")

    statement.is_paid = True
    db.commit()
    return StatementResponse.model_validate(statement)
