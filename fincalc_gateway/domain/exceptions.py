"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException, ValueError):
    """Calculator input is missing, non-numeric or out of bounds"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class LoansAPIError(DomainException):
    """Loans listing API returned an error or is unavailable"""

    pass
