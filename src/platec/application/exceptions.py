"""Application layer exceptions."""

from platec.domain.shared.exceptions import DomainException, ErrorCode


class NotificationError(Exception):
    """Raised when an outbound notification could not be delivered."""

    def __init__(self, message: str = "Notification could not be sent") -> None:
        self.message = message
        super().__init__(message)


class StartupReconciliationError(DomainException):
    """Aggregated failure of the startup role/admin reconciliation."""

    def __init__(self, failures: list[str]) -> None:
        self.failures = list(failures)
        super().__init__(
            "Startup reconciliation failed: " + "; ".join(self.failures),
            code=ErrorCode.STARTUP_FAILED,
            details={"failures": self.failures},
        )
