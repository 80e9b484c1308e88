"""Prometheus metrics for monitoring ledger activity and persistence failures"""

from prometheus_client import Counter, Histogram

# Ledger metrics
transaction_counter = Counter(
    "pocket_ledger_transactions_total",
    "Transactions recorded",
    ["type", "category_kind"],  # income | expense ; loan | salary | other
)

loan_bills_counter = Counter(
    "pocket_ledger_loan_bills_total",
    "Bills generated from loan installment schedules",
    ["frequency"],
)

card_payment_counter = Counter(
    "pocket_ledger_card_payments_total",
    "Payments recorded against credit cards",
)

# Persistence metrics
persistence_failures_counter = Counter(
    "pocket_ledger_persistence_failures_total",
    "Batched writes rolled back after an error",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transaction(transaction_type: str, category_kind: str, bills_created: int, frequency: str | None) -> None:
    """Record transaction metrics, including loan bills when a schedule was generated"""
    transaction_counter.labels(type=transaction_type, category_kind=category_kind).inc()

    if bills_created and frequency:
        loan_bills_counter.labels(frequency=frequency).inc(bills_created)
