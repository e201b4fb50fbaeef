"""Generic persistence over a single SQLAlchemy model.

``RecordStore`` is the only place that talks to the session directly. Higher
layers compose it and pass filters as lists of SQLAlchemy criteria, e.g.::

    store = RecordStore(db, InventoryItem)
    store.find_all([InventoryItem.owner_id == owner_id], page=2, limit=20)
"""
import logging
import math
import re
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, inspect
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT = "-created_at"

# sqlite: "UNIQUE constraint failed: inventory_items.sku"
# postgres: "Key (sku)=(ELE-1) already exists."
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),
    re.compile(r"Key \((\w+)\)="),
)


class RecordStore(Generic[ModelT]):

    def __init__(self, db: Session, model: Type[ModelT],
                 sort_aliases: Optional[Mapping[str, str]] = None,
                 field_labels: Optional[Mapping[str, str]] = None):
        self.db = db
        self.model = model
        self.sort_aliases = dict(sort_aliases or {})
        # display names used in conflict messages
        self.field_labels = dict(field_labels or {})
        self._columns = {c.key: c for c in inspect(model).column_attrs}

    # ----------------- Queries -----------------

    def find_all(self, filters: Optional[Sequence] = None,
                 page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT,
                 sort: Optional[str] = DEFAULT_SORT) -> Dict[str, Any]:
        if page is None or page < 1:
            raise ValidationError("Page must be greater than or equal to 1")
        if limit is None or limit < 1:
            raise ValidationError("Limit must be greater than or equal to 1")

        filters = list(filters or [])
        skip = (page - 1) * limit

        items = (
            self._query(filters)
            .order_by(*self._order_by(sort))
            .offset(skip)
            .limit(limit)
            .all()
        )
        total = self.count(filters)

        return {
            "items": items,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }

    def find_many(self, filters: Optional[Sequence] = None,
                  sort: Optional[str] = DEFAULT_SORT) -> List[ModelT]:
        return self._query(list(filters or [])).order_by(*self._order_by(sort)).all()

    def find_by_id(self, record_id: Any) -> Optional[ModelT]:
        if record_id is None:
            return None
        return self.db.get(self.model, str(record_id))

    def find_one(self, filters: Optional[Sequence] = None) -> Optional[ModelT]:
        return self._query(list(filters or [])).first()

    def count(self, filters: Optional[Sequence] = None) -> int:
        pk = inspect(self.model).primary_key[0]
        return self.db.query(func.count(pk)).filter(*list(filters or [])).scalar() or 0

    # ----------------- Commands -----------------

    def create(self, data: Mapping[str, Any]) -> ModelT:
        values = self._known_fields(data)
        self._check_required(values)

        record = self.model(**values)
        self.db.add(record)
        self._commit()
        self.db.refresh(record)
        return record

    def update_by_id(self, record_id: Any, patch: Mapping[str, Any]) -> Optional[ModelT]:
        record = self.find_by_id(record_id)
        if not record:
            return None

        try:
            for key, value in self._known_fields(patch).items():
                if value is None and not self._columns[key].columns[0].nullable:
                    raise ValidationError(f"{key} cannot be empty")
                setattr(record, key, value)
        except ValidationError:
            # discard fields already assigned from this patch
            self.db.rollback()
            raise

        self._commit()
        self.db.refresh(record)
        return record

    def delete_by_id(self, record_id: Any) -> Optional[ModelT]:
        record = self.find_by_id(record_id)
        if not record:
            return None

        self.db.delete(record)
        self._commit()
        return record

    # ----------------- Helpers -----------------

    def _query(self, filters: List):
        return self.db.query(self.model).filter(*filters)

    def _order_by(self, sort: Optional[str]):
        sort = (sort or DEFAULT_SORT).strip()
        descending = sort.startswith("-")
        field = sort.lstrip("-+")
        field = self.sort_aliases.get(field, field)

        if field not in self._columns:
            raise ValidationError(f"Cannot sort by '{field}'")

        column = getattr(self.model, field)
        pk_key = inspect(self.model).primary_key[0].key
        primary = column.desc() if descending else column.asc()
        if field == pk_key:
            return [primary]
        # tie-break on the primary key so pages never overlap
        return [primary, getattr(self.model, pk_key).asc()]

    def _known_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in dict(data).items() if k in self._columns}

    def _check_required(self, values: Dict[str, Any]):
        missing = []
        for key, attr in self._columns.items():
            column = attr.columns[0]
            if column.primary_key or column.nullable:
                continue
            if column.default is not None or column.server_default is not None:
                continue
            if values.get(key) is None:
                missing.append(key)

        if missing:
            raise ValidationError(
                "Please provide " + ", ".join(missing))

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            field = self._unique_field(exc)
            if not field:
                logger.warning("Integrity error on %s: %s",
                               self.model.__tablename__, exc.orig)
                raise ValidationError("Record violates a database constraint")
            logger.info("Unique constraint violated on %s.%s",
                        self.model.__tablename__, field)
            raise ConflictError(f"{self.field_labels.get(field, field)} already exists")
        except (DataError, OverflowError) as exc:
            # value out of range for the column type
            self.db.rollback()
            logger.info("Out of range value for %s: %s",
                        self.model.__tablename__, getattr(exc, "orig", exc))
            raise ValidationError("Value out of range")

    @staticmethod
    def _unique_field(exc: IntegrityError) -> Optional[str]:
        text = str(exc.orig)
        for pattern in _UNIQUE_FIELD_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)
        return None
