"""Document-store facade over a SQLModel session.

Services never talk to the session directly. They receive a
:class:`DocumentStore` and use a small set of collection-style operations
(get, add, save, delete, find, count). ``find`` follows document-database
query rules: combining equality filters with an ordering on a different
field requires a composite index declared on the table, otherwise the query
fails with :class:`MissingIndexError` and callers may retry unordered.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import text
from sqlmodel import Session, SQLModel, func, select

from .time import utcnow

ModelT = TypeVar("ModelT", bound=SQLModel)


class MissingIndexError(RuntimeError):
    """Raised when a filtered, ordered query has no composite index to serve it."""

    def __init__(self, table: str, filters: Sequence[str], order_by: str) -> None:
        self.table = table
        self.filters = tuple(sorted(filters))
        self.order_by = order_by
        super().__init__(
            f"The query requires an index on {table}({', '.join(self.filters)}, {order_by})"
        )


class DocumentStore:
    """Explicitly constructed store handle passed into every service."""

    def __init__(self, session: Session, *, enforce_indexes: bool = True) -> None:
        self.session = session
        self.enforce_indexes = enforce_indexes

    # Single documents ------------------------------------------------------
    def get(self, model: Type[ModelT], doc_id: Any) -> Optional[ModelT]:
        if doc_id is None or doc_id == "":
            return None
        return self.session.get(model, doc_id)

    def add(self, doc: ModelT) -> ModelT:
        self.session.add(doc)
        self.session.commit()
        self.session.refresh(doc)
        return doc

    def save(self, doc: ModelT, **fields: Any) -> ModelT:
        for key, value in fields.items():
            setattr(doc, key, value)
        if "updated_at" in type(doc).model_fields and "updated_at" not in fields:
            doc.updated_at = utcnow()
        return self.add(doc)

    def delete(self, doc: SQLModel) -> None:
        self.session.delete(doc)
        self.session.commit()

    def delete_where(self, model: Type[SQLModel], **filters: Any) -> int:
        docs = self.find(model, filters=filters)
        for doc in docs:
            self.session.delete(doc)
        self.session.commit()
        return len(docs)

    # Queries ---------------------------------------------------------------
    def find(
        self,
        model: Type[ModelT],
        *,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        filters = dict(filters or {})
        if order_by is not None:
            self._check_index(model, filters.keys(), order_by)

        statement = select(model)
        for clause in self._where(model, filters):
            statement = statement.where(clause)
        if order_by is not None:
            column = getattr(model, order_by)
            if descending:
                statement = statement.order_by(column.is_(None).desc(), column.desc())
            else:
                statement = statement.order_by(column.is_(None), column)
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.exec(statement).all())

    def count(self, model: Type[SQLModel], **filters: Any) -> int:
        statement = select(func.count()).select_from(model)
        for clause in self._where(model, filters):
            statement = statement.where(clause)
        return int(self.session.exec(statement).one())

    def rollback(self) -> None:
        self.session.rollback()

    def ping(self) -> None:
        self.session.connection().execute(text("SELECT 1"))

    # Helpers ---------------------------------------------------------------
    @staticmethod
    def _where(model: Type[SQLModel], filters: Dict[str, Any]) -> List[Any]:
        clauses = []
        for key, value in filters.items():
            column = getattr(model, key)
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    def _check_index(self, model: Type[SQLModel], filter_fields: Iterable[str], order_by: str) -> None:
        fields = set(filter_fields) - {order_by}
        if not self.enforce_indexes or not fields:
            return
        table = model.__table__
        for index in table.indexes:
            columns = [column.name for column in index.columns]
            if columns[-1] == order_by and set(columns[:-1]) == fields and len(columns) == len(fields) + 1:
                return
        raise MissingIndexError(table.name, sorted(fields), order_by)


__all__ = ["DocumentStore", "MissingIndexError"]
