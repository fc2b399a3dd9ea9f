"""Exceptions raised at the input boundary."""


class InvalidInputError(ValueError):
    """Raised when a caller supplies a value outside the documented domain.

    The calendar and zakat arithmetic never raise on numeric input; this is
    reserved for parsing ISO dates, decoding request payloads and lookups
    with an out-of-range index.
    """
