"""SQLAlchemy declarative base for platec_identity models.

Uses the same metadata as platec's Base so student rows can reference users.
"""

from platec.infrastructure.persistence.sqlalchemy.models.base import Base

IdentityBase = Base
