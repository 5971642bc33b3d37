"""Identity infrastructure services."""

from platec_identity.services.antiforgery_service import AntiforgeryService
from platec_identity.services.jwt_service import JWTService
from platec_identity.services.password_service import PasswordHashingService

__all__ = ["AntiforgeryService", "JWTService", "PasswordHashingService"]
