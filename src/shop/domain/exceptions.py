"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them are retried: the caller has to correct its input.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A field value was rejected at construction or mutation time."""


class InvalidAmount(ValidationError):
    """A money amount is negative, not a number, or not finite."""


class InvalidCurrency(ValidationError):
    """A currency code is not a 3-character code."""


class InvalidDiscount(ValidationError):
    """A discount percentage falls outside [0, 100]."""


class EmptyIdentifier(ValidationError):
    """An identifier is empty after trimming."""


class InvalidQuantity(ValidationError):
    """A quantity that must be positive was zero or negative."""


class CurrencyMismatch(DomainException):
    """Two Money values with different currencies were combined."""


class InsufficientStock(DomainException):
    """A stock reduction asked for more units than remain."""


class ProductUnavailable(DomainException):
    """The product does not report itself available."""


class CartCapacityExceeded(DomainException):
    """The cart already holds the maximum number of distinct lines."""


class LineNotFound(DomainException):
    """The cart has no line for the requested product."""


class UnsupportedVariant(DomainException):
    """The factory has no builder registered for a variant tag."""


class NullProductOperation(DomainException):
    """A mutator was called on the "not found" product."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
