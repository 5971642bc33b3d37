"""Errors raised while building user aggregates."""


class InvalidEmailError(ValueError):
    """An address that does not look like ``local@domain.tld``."""

    def __init__(self, value: str) -> None:
        self.value = value
        if value:
            super().__init__(f"Invalid email format: {value}")
        else:
            super().__init__("Email cannot be empty")
