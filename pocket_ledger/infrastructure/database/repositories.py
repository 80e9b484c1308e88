"""Data access layer for ledger entities

Every query is scoped by the owning user id passed in by the caller.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from pocket_ledger.infrastructure.database.models import (
    Bill,
    CreditCard,
    Payment,
    Statement,
    Transaction,
    User,
)
from pocket_ledger.domain.models import BillDraft


class UserRepository:
    """Repository for user profiles"""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def save_profile(self, user_id: str, username: str, email: Optional[str]) -> User:
        """Create the profile on first call, update it afterwards"""
        user = self.get_user(user_id)
        if user is None:
            user = User(id=user_id, username=username, email=email)
            self.db.add(user)
        else:
            user.username = username
            user.email = email
        self.db.flush()
        return user


class TransactionRepository:
    """Repository for income/expense transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        description: str,
        amount_cents: int,
        type: str,
        category: str,
        date: date,
        has_advance: bool = False,
        advance_cents: Optional[int] = None,
        loan_details: Optional[Dict[str, Any]] = None,
    ) -> Transaction:
        """Stage a transaction in the current batch"""
        db_transaction = Transaction(
            user_id=user_id,
            description=description,
            amount_cents=amount_cents,
            type=type,
            category=category,
            date=date,
            has_advance=has_advance,
            advance_cents=advance_cents,
            loan_details=loan_details,
        )
        self.db.add(db_transaction)
        self.db.flush()  # Get ID without committing
        return db_transaction

    def get_transaction(self, user_id: str, transaction_id: uuid.UUID) -> Optional[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .first()
        )

    def list_transactions(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Transactions newest first, optionally bounded by date (inclusive)"""
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)
        if start is not None:
            query = query.filter(Transaction.date >= start)
        if end is not None:
            query = query.filter(Transaction.date <= end)
        query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def delete_transaction(self, transaction: Transaction) -> None:
        self.db.delete(transaction)


class BillRepository:
    """Repository for bills, including loan installments"""

    def __init__(self, db: Session):
        self.db = db

    def create_bill(self, draft: BillDraft, transaction_id: Optional[uuid.UUID] = None) -> Bill:
        db_bill = Bill(
            user_id=draft.user_id,
            name=draft.name,
            amount_cents=draft.amount_cents,
            due_date=draft.due_date,
            loan_id=draft.loan_id,
            installment_number=draft.installment_number,
            transaction_id=transaction_id,
        )
        self.db.add(db_bill)
        return db_bill

    def create_installment_bills(self, drafts: List[BillDraft], transaction_id: uuid.UUID) -> List[Bill]:
        """Stage one bill per installment in the same batch as the transaction"""
        bills = [self.create_bill(draft, transaction_id=transaction_id) for draft in drafts]
        self.db.flush()
        return bills

    def loan_exists(self, user_id: str, loan_id: str) -> bool:
        return (
            self.db.query(Bill.id)
            .filter(Bill.user_id == user_id, Bill.loan_id == loan_id)
            .first()
            is not None
        )

    def get_bill(self, user_id: str, bill_id: uuid.UUID) -> Optional[Bill]:
        return self.db.query(Bill).filter(Bill.id == bill_id, Bill.user_id == user_id).first()

    def list_bills(self, user_id: str) -> List[Bill]:
        """Bills ordered by due date ascending"""
        return (
            self.db.query(Bill)
            .filter(Bill.user_id == user_id)
            .order_by(Bill.due_date.asc(), Bill.installment_number.asc())
            .all()
        )

    def list_due_between(self, user_id: str, start: date, end: date) -> List[Bill]:
        return (
            self.db.query(Bill)
            .filter(Bill.user_id == user_id, Bill.due_date >= start, Bill.due_date <= end)
            .order_by(Bill.due_date.asc())
            .all()
        )

    def mark_paid(self, bill: Bill) -> Bill:
        if not bill.is_paid:
            bill.is_paid = True
            bill.paid_at = datetime.now(timezone.utc)
        return bill

    def delete_bill(self, bill: Bill) -> None:
        self.db.delete(bill)


class CreditCardRepository:
    """Repository for credit cards and their payments"""

    def __init__(self, db: Session):
        self.db = db

    def create_card(
        self,
        user_id: str,
        card_name: str,
        bank: str,
        credit_limit_cents: int,
        current_debt_cents: int,
        last_four_digits: str,
    ) -> CreditCard:
        db_card = CreditCard(
            user_id=user_id,
            card_name=card_name,
            bank=bank,
            credit_limit_cents=credit_limit_cents,
            current_debt_cents=current_debt_cents,
            last_four_digits=last_four_digits,
        )
        self.db.add(db_card)
        self.db.flush()
        return db_card

    def get_card(self, user_id: str, card_id: uuid.UUID, for_update: bool = False) -> Optional[CreditCard]:
        query = self.db.query(CreditCard).filter(CreditCard.id == card_id, CreditCard.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def list_cards(self, user_id: str) -> List[CreditCard]:
        return (
            self.db.query(CreditCard)
            .filter(CreditCard.user_id == user_id)
            .order_by(CreditCard.created_at.asc())
            .all()
        )

    def create_payment(self, card: CreditCard, amount_cents: int, paid_on: date) -> Optional[Payment]:
        """
        Stage a payment row together with the debt reduction.

        The debt is decremented in SQL and only while it still covers the
        amount. Returns None, staging nothing, when it no longer does.
        """
        updated = (
            self.db.query(CreditCard)
            .filter(CreditCard.id == card.id, CreditCard.current_debt_cents >= amount_cents)
            .update(
                {CreditCard.current_debt_cents: CreditCard.current_debt_cents - amount_cents},
                synchronize_session=False,
            )
        )
        if updated == 0:
            return None
        self.db.refresh(card)

        db_payment = Payment(
            card_id=card.id,
            user_id=card.user_id,
            amount_cents=amount_cents,
            paid_on=paid_on,
        )
        self.db.add(db_payment)
        self.db.flush()
        return db_payment


class StatementRepository:
    """Repository for card statements"""

    def __init__(self, db: Session):
        self.db = db

    def create_statement(
        self,
        card: CreditCard,
        month: str,
        statement_balance_cents: int,
        minimum_payment_cents: int,
        payment_for_no_interest_cents: int,
        due_date: date,
        is_paid: bool = False,
    ) -> Statement:
        db_statement = Statement(
            card_id=card.id,
            user_id=card.user_id,
            month=month,
            statement_balance_cents=statement_balance_cents,
            minimum_payment_cents=minimum_payment_cents,
            payment_for_no_interest_cents=payment_for_no_interest_cents,
            due_date=due_date,
            is_paid=is_paid,
        )
        self.db.add(db_statement)
        self.db.flush()
        return db_statement

    def get_statement(self, user_id: str, statement_id: uuid.UUID) -> Optional[Statement]:
        return (
            self.db.query(Statement)
            .filter(Statement.id == statement_id, Statement.user_id == user_id)
            .first()
        )

    def list_for_card(self, card: CreditCard) -> List[Statement]:
        return (
            self.db.query(Statement)
            .filter(Statement.card_id == card.id)
            .order_by(Statement.due_date.desc())
            .all()
        )

    def list_unpaid_due_between(self, user_id: str, start: date, end: date) -> List[Statement]:
        return (
            self.db.query(Statement)
            .filter(
                Statement.user_id == user_id,
                Statement.is_paid.is_(False),
                Statement.due_date >= start,
                Statement.due_date <= end,
            )
            .order_by(Statement.due_date.asc())
            .all()
        )
