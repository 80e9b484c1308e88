"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class Frequency(str, Enum):
    """Repayment cadence of a loan"""

    MONTHLY = "monthly"
    BIWEEKLY = "bi-weekly"
    SEMI_MONTHLY = "semi-monthly"


@dataclass
class ScheduledInstallment:
    """Single repayment unit produced by the scheduler"""

    installment_number: int
    due_date: date
    amount_cents: int


@dataclass
class LoanTerms:
    """Repayment parameters embedded in a loan transaction"""

    loan_id: str
    installments: int
    frequency: Frequency
    start_date: date
    total_cents: Optional[int] = None
    amounts_cents: Optional[List[int]] = None
    interest_rate: float = 0

    def to_document(self) -> dict:
        """JSON-safe form stored on the transaction"""
        return {
            "loan_id": self.loan_id,
            "installments": self.installments,
            "frequency": Frequency(self.frequency).value,
            "start_date": self.start_date.isoformat(),
            "total_cents": self.total_cents,
            "amounts_cents": self.amounts_cents,
            "interest_rate": self.interest_rate,
        }


@dataclass
class BillDraft:
    """Bill ready to be persisted"""

    user_id: str
    name: str
    amount_cents: int
    due_date: date
    loan_id: Optional[str] = None
    installment_number: Optional[int] = None


@dataclass
class LedgerEntry:
    """Minimal view of a transaction used by the rollups"""

    date: date
    amount_cents: int
    type: str  # "income" or "expense"


@dataclass
class UpcomingPayment:
    """Bill or statement due inside the notification window"""

    id: str
    name: str
    due_date: date
    kind: str  # "bill" or "statement"
    amount_cents: int


@dataclass
class BalanceSummary:
    """Headline balances shown on the dashboard"""

    total_income_cents: int
    total_expense_cents: int
    total_balance_cents: int
    checking_cents: int
    savings_cents: int
    credit_card_cents: int


@dataclass
class MonthlyBalance:
    month: str  # YYYY-MM
    balance_cents: int


@dataclass
class MonthlyFlow:
    month: str  # YYYY-MM
    income_cents: int = 0
    expense_cents: int = 0


@dataclass
class FlowReport:
    """Income vs expenses over the reporting window"""

    months: List[MonthlyFlow] = field(default_factory=list)
    total_income_cents: int = 0
    total_expense_cents: int = 0

    @property
    def net_flow_cents(self) -> int:
        return self.total_income_cents - self.total_expense_cents
