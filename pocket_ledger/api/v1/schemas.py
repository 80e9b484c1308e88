"""Pydantic schemas for API request/response validation"""

import uuid
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pocket_ledger.config import settings
from pocket_ledger.domain.models import Frequency, LoanTerms
from pocket_ledger.services.transactions import LOAN_CATEGORY, SALARY_CATEGORY


class LoanDetailsSchema(BaseModel):
    """Repayment parameters of a loan transaction"""

    loan_id: str = Field(..., min_length=1, description="Loan identifier, unique per user")
    installments: int = Field(..., ge=1, le=settings.max_installments, description="Number of installments")
    frequency: Frequency
    start_date: date = Field(..., description="Due date of the first installment")
    total_cents: Optional[int] = Field(None, gt=0, description="Total to divide evenly")
    installment_amounts_cents: Optional[List[int]] = Field(
        None, description="Explicit amount per installment; missing entries are 0"
    )
    interest_rate: float = Field(0, ge=0, description="Annual interest rate in percent, stored with the loan")

    @model_validator(mode="after")
    def check_amounts(self) -> "LoanDetailsSchema":
        amounts = self.installment_amounts_cents
        if amounts is None and self.total_cents is None:
            raise ValueError("Either total_cents or installment_amounts_cents is required")
        if amounts is not None:
            if len(amounts) > self.installments:
                raise ValueError("More installment amounts than installments")
            if any(a < 0 for a in amounts):
                raise ValueError("Installment amounts cannot be negative")
        return self

    def to_terms(self) -> LoanTerms:
        return LoanTerms(
            loan_id=self.loan_id,
            installments=self.installments,
            frequency=self.frequency,
            start_date=self.start_date,
            total_cents=self.total_cents,
            amounts_cents=self.installment_amounts_cents,
            interest_rate=self.interest_rate,
        )


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    description: str = Field(..., min_length=2)
    amount_cents: int = Field(..., gt=0, description="Transaction amount in cents")
    type: Literal["income", "expense"]
    category: str = Field(..., min_length=1)
    date: date
    has_advance: bool = False
    advance_cents: Optional[int] = None
    loan_details: Optional[LoanDetailsSchema] = None

    @model_validator(mode="after")
    def check_category_rules(self) -> "TransactionCreate":
        if self.has_advance:
            if self.advance_cents is None or self.advance_cents <= 0:
                raise ValueError("advance_cents is required when has_advance is set")
            if self.advance_cents >= self.amount_cents:
                raise ValueError("advance_cents must be smaller than amount_cents")

        if self.category == LOAN_CATEGORY:
            if self.loan_details is None:
                raise ValueError("loan_details is required for loan transactions")
            total = self.loan_details.total_cents
            if total is not None and total != self.amount_cents:
                raise ValueError("amount_cents must equal loan_details.total_cents")
        else:
            self.loan_details = None

        # Salary and loan proceeds are always money in
        if self.category in (LOAN_CATEGORY, SALARY_CATEGORY):
            self.type = "income"
        return self


class BillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    amount_cents: int
    due_date: date
    is_paid: bool
    loan_id: Optional[str] = None
    installment_number: Optional[int] = None
    transaction_id: Optional[uuid.UUID] = None


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    description: str
    amount_cents: int
    net_amount_cents: int
    type: str
    category: str
    date: date
    has_advance: bool
    advance_cents: Optional[int] = None
    loan_details: Optional[Dict[str, Any]] = None


class TransactionCreatedResponse(BaseModel):
    """Response for POST /v1/transactions"""

    transaction: TransactionResponse
    bills: List[BillResponse]


class TransactionListResponse(BaseModel):
    user_id: str
    filter: str
    transactions: List[TransactionResponse]


class ScheduleItem(BaseModel):
    installment_number: int
    due_date: date
    amount_cents: int


class LoanPreviewResponse(BaseModel):
    """Schedule a loan would generate, without writing anything"""

    loan_id: str
    total_cents: int
    installments: List[ScheduleItem]


class BillCreate(BaseModel):
    name: str = Field(..., min_length=2)
    amount_cents: int = Field(..., gt=0)
    due_date: date


class BillListResponse(BaseModel):
    user_id: str
    bills: List[BillResponse]


class CreditCardCreate(BaseModel):
    card_name: str = Field(..., min_length=3)
    bank: str = Field(..., min_length=2)
    credit_limit_cents: int = Field(..., gt=0)
    current_debt_cents: int = Field(0, ge=0)
    last_four_digits: str = Field(..., pattern=r"^\d{4}$")


class CreditCardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    card_name: str
    bank: str
    credit_limit_cents: int
    current_debt_cents: int
    last_four_digits: str
    usage_percentage: float


class StatementCreate(BaseModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="Billing month as YYYY-MM")
    statement_balance_cents: int = Field(..., ge=0)
    minimum_payment_cents: int = Field(..., ge=0)
    payment_for_no_interest_cents: int = Field(..., ge=0)
    due_date: date
    is_paid: bool = False


class StatementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    card_id: uuid.UUID
    month: str
    statement_balance_cents: int
    minimum_payment_cents: int
    payment_for_no_interest_cents: int
    due_date: date
    is_paid: bool


class PaymentCreate(BaseModel):
    amount_cents: int = Field(..., gt=0)
    paid_on: Optional[date] = None


class PaymentResponse(BaseModel):
    payment_id: uuid.UUID
    card_id: uuid.UUID
    amount_cents: int
    paid_on: date
    remaining_debt_cents: int


class UserProfileRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: Optional[str] = None


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: Optional[str] = None


class UpcomingPaymentSchema(BaseModel):
    id: str
    name: str
    due_date: date
    kind: Literal["bill", "statement"]
    amount_cents: int


class NotificationsResponse(BaseModel):
    """Response for GET /v1/notifications"""

    user_id: str
    window_start: date
    window_end: date
    upcoming: List[UpcomingPaymentSchema]


class MonthlyBalanceSchema(BaseModel):
    month: str
    balance_cents: int


class DashboardResponse(BaseModel):
    total_balance_cents: int
    checking_cents: int
    savings_cents: int
    credit_card_cents: int
    history: List[MonthlyBalanceSchema]


class MonthlyFlowSchema(BaseModel):
    month: str
    income_cents: int
    expense_cents: int


class ReportResponse(BaseModel):
    total_income_cents: int
    total_expense_cents: int
    net_flow_cents: int
    months: List[MonthlyFlowSchema]
