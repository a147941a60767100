"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidMonthError(DomainException, ValueError):
    """Month string is not in YYYY-MM form"""

    pass


class BranchNotFoundError(DomainException):
    """Branch does not exist in the store"""

    pass


class RecordNotFoundError(DomainException):
    """Performance record does not exist in the store"""

    pass


class DuplicateRecordError(DomainException):
    """Branch already has a performance record for that month"""

    pass
