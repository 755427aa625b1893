"""UserStore SQLite 实现"""

from typing import Any

from ..models.user import User
from .base import SqliteStoreBase

_COLUMNS = "user_id, name"


class SqliteUserStore(SqliteStoreBase):
    """UserStore 的 SQLite 实现"""

    async def find_all(self) -> list[User]:
        rows = await self._fetchall(f"SELECT {_COLUMNS} FROM users ORDER BY rowid")
        return [self._row_to_user(row) for row in rows]

    async def find_by_id(self, user_id: str) -> User | None:
        row = await self._fetchone(
            f"SELECT {_COLUMNS} FROM users WHERE user_id = ?",
            (user_id,),
        )
        return self._row_to_user(row) if row else None

    async def create(self, user: User) -> User:
        await self._write(
            "create_user",
            "INSERT INTO users (user_id, name) VALUES (?, ?)",
            (user.user_id, user.name),
        )
        return user

    async def update(self, user_id: str, **fields: Any) -> User | None:
        current = await self.find_by_id(user_id)
        if current is None:
            return None
        updated = current.model_copy(update=fields)
        await self._write(
            "update_user",
            "UPDATE users SET name = ? WHERE user_id = ?",
            (updated.name, user_id),
        )
        return updated

    async def delete(self, user_id: str) -> bool:
        count = await self._write(
            "delete_user",
            "DELETE FROM users WHERE user_id = ?",
            (user_id,),
        )
        return count > 0

    async def find_by_name(self, name: str) -> User | None:
        row = await self._fetchone(
            f"SELECT {_COLUMNS} FROM users WHERE name = ? ORDER BY rowid LIMIT 1",
            (name,),
        )
        return self._row_to_user(row) if row else None

    @staticmethod
    def _row_to_user(row: Any) -> User:
        return User(user_id=row[0], name=row[1])
