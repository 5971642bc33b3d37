"""Application services for identity management."""

from platec_identity.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = ["AuthenticationService"]
