"""ReactionStore SQLite 实现

覆盖语义（先删后插）由 ReactionService 负责，此处仅提供数据库操作。
"""

from typing import Any

from ..models.enums import ReactionType
from ..models.reaction import Reaction
from .base import SqliteStoreBase, from_db_ts, to_db_ts

_COLUMNS = "reaction_id, task_id, user_id, type, created_at, is_first_reaction_for_task"
_ORDER = "ORDER BY created_at ASC, rowid ASC"


class SqliteReactionStore(SqliteStoreBase):
    """ReactionStore 的 SQLite 实现"""

    async def find_all(self) -> list[Reaction]:
        rows = await self._fetchall(f"SELECT {_COLUMNS} FROM reactions {_ORDER}")
        return [self._row_to_reaction(row) for row in rows]

    async def find_by_id(self, reaction_id: str) -> Reaction | None:
        row = await self._fetchone(
            f"SELECT {_COLUMNS} FROM reactions WHERE reaction_id = ?",
            (reaction_id,),
        )
        return self._row_to_reaction(row) if row else None

    async def create(self, reaction: Reaction) -> Reaction:
        await self._write(
            "create_reaction",
            f"INSERT INTO reactions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            (
                reaction.reaction_id,
                reaction.task_id,
                reaction.user_id,
                reaction.type.value,
                to_db_ts(reaction.created_at),
                int(reaction.is_first_reaction_for_task),
            ),
        )
        return reaction

    async def update(self, reaction_id: str, **fields: Any) -> Reaction | None:
        current = await self.find_by_id(reaction_id)
        if current is None:
            return None
        updated = Reaction.model_validate({**current.model_dump(), **fields})
        await self._write(
            "update_reaction",
            """
            UPDATE reactions
            SET task_id = ?, user_id = ?, type = ?, created_at = ?,
                is_first_reaction_for_task = ?
            WHERE reaction_id = ?
            """,
            (
                updated.task_id,
                updated.user_id,
                updated.type.value,
                to_db_ts(updated.created_at),
                int(updated.is_first_reaction_for_task),
                reaction_id,
            ),
        )
        return updated

    async def delete(self, reaction_id: str) -> bool:
        count = await self._write(
            "delete_reaction",
            "DELETE FROM reactions WHERE reaction_id = ?",
            (reaction_id,),
        )
        return count > 0

    async def find_by_task(self, task_id: str) -> list[Reaction]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM reactions WHERE task_id = ? {_ORDER}",
            (task_id,),
        )
        return [self._row_to_reaction(row) for row in rows]

    async def find_by_user(self, user_id: str) -> list[Reaction]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM reactions WHERE user_id = ? {_ORDER}",
            (user_id,),
        )
        return [self._row_to_reaction(row) for row in rows]

    async def find_by_task_and_user(self, task_id: str, user_id: str) -> list[Reaction]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM reactions WHERE task_id = ? AND user_id = ? {_ORDER}",
            (task_id, user_id),
        )
        return [self._row_to_reaction(row) for row in rows]

    async def find_first_reaction_for_task(self, task_id: str) -> Reaction | None:
        row = await self._fetchone(
            f"""
            SELECT {_COLUMNS} FROM reactions
            WHERE task_id = ? AND is_first_reaction_for_task = 1
            {_ORDER}
            LIMIT 1
            """,
            (task_id,),
        )
        return self._row_to_reaction(row) if row else None

    @staticmethod
    def _row_to_reaction(row: Any) -> Reaction:
        return Reaction(
            reaction_id=row[0],
            task_id=row[1],
            user_id=row[2],
            type=ReactionType(row[3]),
            created_at=from_db_ts(row[4]),
            is_first_reaction_for_task=bool(row[5]),
        )
