from platec_identity.domain.user.repositories.user_directory import UserDirectory

__all__ = ["UserDirectory"]
