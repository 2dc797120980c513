"""Repository base class and column helpers shared by the stores.

`BaseRepository` wraps the add/commit/refresh boilerplate around a
request-scoped session. The `dump_list` / `load_list` pair converts between
Python lists and the JSON-encoded text columns used for list attributes.
"""

import json
from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional, List, Any, Iterable
from database.models import Base

T = TypeVar('T', bound=Base)


def dump_list(values: Optional[Iterable[Any]]) -> str:
    """Encode a list attribute for storage. ``None`` is stored as ``[]``."""
    return json.dumps([str(v) for v in (values or [])])


def load_list(raw: Optional[str]) -> List[str]:
    """Decode a JSON-encoded list column.

    Rows written by other parts of the application sometimes hold a bare
    comma-separated string instead of JSON; those are split on commas.
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return [part.strip() for part in str(raw).split(",") if part.strip()]
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    if isinstance(value, str):
        return [value]
    return []


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def create_many(self, objects: List[T]) -> List[T]:
        """Add multiple objects, commit and refresh all."""
        self.session.add_all(objects)
        self.session.commit()
        for obj in objects:
            self.session.refresh(obj)
        return objects

    def first_by(self, **filters: Any) -> Optional[T]:
        """Return the first row matching the given column equality filters."""
        return self.session.query(self.model).filter_by(**filters).first()

    def update(self, obj: T) -> T:
        """Commit changes to an existing object and refresh."""
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def count(self) -> int:
        """Count total number of records."""
        return self.session.query(self.model).count()
