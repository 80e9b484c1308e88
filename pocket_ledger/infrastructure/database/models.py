"""SQLAlchemy ORM models for the ledger collections"""

import uuid
from sqlalchemy import (
    Column,
    String,
    BigInteger,
    Boolean,
    DateTime,
    Date,
    Integer,
    ForeignKey,
    Text,
    JSON,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class User(Base):
    """Profile of a signed-in user; id comes from the auth layer"""

    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    username = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Transaction(Base):
    """Income or expense record, optionally carrying loan details"""

    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    type = Column(String(16), nullable=False)
    category = Column(Text, nullable=False)
    date = Column(Date, nullable=False, index=True)
    has_advance = Column(Boolean, nullable=False, default=False)
    advance_cents = Column(BigInteger, nullable=True)
    loan_details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    bills = relationship("Bill", back_populates="transaction")

    @property
    def net_amount_cents(self) -> int:
        if self.has_advance and self.advance_cents:
            return self.amount_cents - self.advance_cents
        return self.amount_cents


class Bill(Base):
    """Scheduled payment obligation"""

    __tablename__ = "bills"
    __table_args__ = (
        UniqueConstraint("user_id", "loan_id", "installment_number", name="uq_bill_loan_installment"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    loan_id = Column(Text, nullable=True)
    installment_number = Column(Integer, nullable=True)
    transaction_id = Column(
        Uuid(as_uuid=True), ForeignKey("transactions.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transaction = relationship("Transaction", back_populates="bills")


class CreditCard(Base):
    """Credit card with a running debt balance"""

    __tablename__ = "credit_cards"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    card_name = Column(Text, nullable=False)
    bank = Column(Text, nullable=False)
    credit_limit_cents = Column(BigInteger, nullable=False)
    current_debt_cents = Column(BigInteger, nullable=False, default=0)
    last_four_digits = Column(String(4), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    statements = relationship("Statement", back_populates="card", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="card", cascade="all, delete-orphan")

    @property
    def usage_percentage(self) -> float:
        return round(self.current_debt_cents / self.credit_limit_cents * 100, 2)


class Statement(Base):
    """Monthly billing-cycle summary of a card"""

    __tablename__ = "statements"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    card_id = Column(Uuid(as_uuid=True), ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, nullable=False, index=True)
    month = Column(String(7), nullable=False)
    statement_balance_cents = Column(BigInteger, nullable=False)
    minimum_payment_cents = Column(BigInteger, nullable=False)
    payment_for_no_interest_cents = Column(BigInteger, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    card = relationship("CreditCard", back_populates="statements")


class Payment(Base):
    """Payment made towards a card's debt"""

    __tablename__ = "payments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    card_id = Column(Uuid(as_uuid=True), ForeignKey("credit_cards.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Text, nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    paid_on = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    card = relationship("CreditCard", back_populates="payments")
