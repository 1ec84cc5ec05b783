"""
Durable key-value storage.

Each key holds one opaque byte value that is replaced in full on every write,
the way a platform preferences store behaves. Backed by the SQLite database
through KeyValueRepository; storage errors propagate to the caller.
"""
from typing import Optional

from sqlalchemy.orm import sessionmaker

from db import make_session_factory
from repositories import KeyValueRepository


class KeyValueStore:
    def __init__(self, session_factory: Optional[sessionmaker] = None, db_path: Optional[str] = None):
        self.session_factory = session_factory or make_session_factory(db_path)
        self.repo = KeyValueRepository()

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None when nothing was ever written under key."""
        with self.session_factory() as session:
            return self.repo.get_value(session, key)

    def set(self, key: str, value: bytes) -> None:
        with self.session_factory() as session:
            self.repo.set_value(session, key, value)

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            self.repo.delete_value(session, key)
