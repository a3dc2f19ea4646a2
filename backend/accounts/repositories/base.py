"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

* They never implement use cases or domain policies.
* They never call commit/rollback; the Unit of Work owns transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from accounts.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Thin, typed data-access helper bound to one mapped model.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``accounts.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _select(self) -> Select[Any]:
        return select(self.model)

    # ------------------------------ CRUD -------------------------------------

    def get(self, id_: int) -> E | None:
        """Fetch an entity by primary key.

        :param id_: Primary key value.
        :type id_: int
        :returns: Entity or ``None`` when absent.
        :rtype: E | None
        """
        return self.session.get(self.model, id_)

    def first_where(self, *criteria: Any) -> E | None:
        """Return the first entity matching all ``criteria`` (or ``None``)."""
        stmt = self._select().where(*criteria).limit(1)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def add(self, instance: E) -> E:
        """Stage ``instance`` for insertion and flush to obtain its identity.

        :param instance: New entity.
        :type instance: E
        :returns: The same instance, now carrying its primary key.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.session.flush()
