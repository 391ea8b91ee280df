class GeoAdvisorException(Exception):
    """Base class for every error raised by geoadvisor."""


class MalformedCRSError(GeoAdvisorException, ValueError):
    """
    Raised when CRS metadata is contradictory or cannot be parsed.

    Examples of contradictory metadata are a descriptor that declares both angular
    and linear units, or one that declares itself geographic while carrying metres.
    """


class InvalidCoordinateError(GeoAdvisorException, ValueError):
    """Raised when a longitude or latitude falls outside its valid range."""


class UnsupportedOperationKindError(GeoAdvisorException, TypeError):
    """Raised when an operation kind is not one of the enumerated OperationKind values."""
