"""Record source reading the owner/property candidate pool tables."""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING

from sqlalchemy import select

from skiptrace.adapters.sqlalchemy.mappings import owner_record_table, property_record_table
from skiptrace.domain.ports.sources import OwnerIdentity, PropertyIdentity

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping
    from sqlalchemy.orm import Session

_OWNER_FIELDS = tuple(item.name for item in fields(OwnerIdentity) if item.name != "owner_id")
_PROPERTY_FIELDS = tuple(
    item.name for item in fields(PropertyIdentity) if item.name not in {"property_id", "lists"}
)


def _text(row: RowMapping, name: str) -> str | None:
    value = row[name]
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SqlAlchemyRecordSource:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_owner_identity(self, owner_id: str) -> OwnerIdentity | None:
        stmt = select(owner_record_table).where(owner_record_table.c.id == owner_id)
        row = self.session.execute(stmt).mappings().one_or_none()
        if row is None:
            return None
        return OwnerIdentity(owner_id=owner_id, **{name: _text(row, name) for name in _OWNER_FIELDS})

    def find_property_identity(self, property_id: str) -> PropertyIdentity | None:
        stmt = select(property_record_table).where(property_record_table.c.id == property_id)
        row = self.session.execute(stmt).mappings().one_or_none()
        if row is None:
            return None
        return PropertyIdentity(
            property_id=property_id,
            lists=tuple(row["lists"] or ()),
            **{name: _text(row, name) for name in _PROPERTY_FIELDS},
        )
