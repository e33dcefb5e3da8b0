"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Input is outside the documented domain of a calculation"""

    pass


class PersistenceError(DomainException):
    """Instrument store call failed (network, permission, constraint)"""

    pass


class RecordNotFoundError(PersistenceError):
    """No record with the given id exists for the owning user"""

    pass
