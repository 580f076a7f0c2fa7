"""factory-boy base class bound to the per-test transactional session."""

from __future__ import annotations

from factory.alchemy import SQLAlchemyModelFactory

_bound_session = None


def bind_session(session) -> None:
    """Point every factory at ``session`` (``None`` unbinds)."""
    global _bound_session
    _bound_session = session


def current_session():
    if _bound_session is None:
        raise RuntimeError("No test session bound; request the 'session' fixture first.")
    return _bound_session


class BaseFactory(SQLAlchemyModelFactory):
    """Persist with ``flush`` so ids exist while the test transaction stays open."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "flush"
