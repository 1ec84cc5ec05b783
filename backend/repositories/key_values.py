"""
Key-value repository backed by SQLAlchemy/SQLite.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from repositories.models import KeyValueORM


class KeyValueRepository:
    """Whole-value reads and overwrites keyed by a string."""

    def get_value(self, session: Session, key: str) -> Optional[bytes]:
        orm = session.get(KeyValueORM, key)
        if not orm:
            return None
        return bytes(orm.value)

    def set_value(self, session: Session, key: str, value: bytes) -> None:
        orm = session.get(KeyValueORM, key)
        if orm is None:
            orm = KeyValueORM(key=key, value=value, updated_at=datetime.utcnow())
        else:
            orm.value = value
            orm.updated_at = datetime.utcnow()
        session.add(orm)
        session.commit()

    def delete_value(self, session: Session, key: str) -> None:
        orm = session.get(KeyValueORM, key)
        if orm:
            session.delete(orm)
            session.commit()
