"""Errors raised by the receipt processors."""


class InvalidInputError(ValueError):
    """Input does not have the expected shape (client-side validation failure)."""
