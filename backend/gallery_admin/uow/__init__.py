"""Units of work over the Flask-SQLAlchemy session.

Services open :class:`SQLAlchemyUnitOfWork` for writes and
:class:`SQLAlchemyReadOnlyUnitOfWork` for lookups.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = ["UnitOfWork", "SQLAlchemyUnitOfWork", "SQLAlchemyReadOnlyUnitOfWork"]
