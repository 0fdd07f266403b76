"""Store: the narrow persistence interface the services use.

Wraps one SQLAlchemy Session. The session is the transaction boundary: services
only flush, and the request's unit of work commits or rolls back as a whole.
"""
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError

T = TypeVar("T")


class Store:
    def __init__(self, db: Session):
        self.db = db

    def get(self, model: type[T], entity_id: int, message: str | None = None) -> T:
        entity = self.db.get(model, entity_id)
        if entity is None:
            raise NotFoundError(message or f"{model.__name__} not found")
        return entity

    def save(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        return entity

    def find_by(self, model: type[T], *criteria: Any, **filters: Any) -> list[T]:
        """All rows of `model` matching keyword equality filters and any extra SQL criteria."""
        query = self.db.query(model).filter_by(**filters)
        if criteria:
            query = query.filter(*criteria)
        return query.order_by(model.id).all()

    def first_by(self, model: type[T], **filters: Any) -> T | None:
        return self.db.query(model).filter_by(**filters).first()

    def exists(self, model: type[T], **filters: Any) -> bool:
        return self.first_by(model, **filters) is not None

    def commit(self) -> None:
        self.db.commit()
