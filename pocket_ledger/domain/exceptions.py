"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidScheduleError(DomainException):
    """Loan parameters cannot produce an installment schedule"""

    pass


class RecordNotFoundError(DomainException):
    """Record does not exist or belongs to another user"""

    pass


class DuplicateLoanError(DomainException):
    """Bills for this loan id were already generated"""

    pass


class PaymentExceedsDebtError(DomainException):
    """Card payment is larger than the outstanding debt"""

    pass


class PersistenceError(DomainException):
    """Batched write failed and was rolled back"""

    pass
