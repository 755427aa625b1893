"""ScoreStore SQLite 实现

积分表 append-only：正常流程只插入。update/delete 仅为满足通用存储接口。
账本枚举顺序即插入顺序（rowid）。
"""

from typing import Any

from ..models.score import ScoreRecord
from .base import SqliteStoreBase, from_db_ts, to_db_ts

_COLUMNS = "score_id, user_id, task_id, value, reason, created_at"


class SqliteScoreStore(SqliteStoreBase):
    """ScoreStore 的 SQLite 实现"""

    async def find_all(self) -> list[ScoreRecord]:
        rows = await self._fetchall(f"SELECT {_COLUMNS} FROM scores ORDER BY rowid")
        return [self._row_to_record(row) for row in rows]

    async def find_by_id(self, score_id: str) -> ScoreRecord | None:
        row = await self._fetchone(
            f"SELECT {_COLUMNS} FROM scores WHERE score_id = ?",
            (score_id,),
        )
        return self._row_to_record(row) if row else None

    async def create(self, record: ScoreRecord) -> ScoreRecord:
        """追加积分记录（append-only）"""
        await self._write(
            "create_score",
            f"INSERT INTO scores ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            (
                record.score_id,
                record.user_id,
                record.task_id,
                record.value,
                record.reason,
                to_db_ts(record.created_at),
            ),
        )
        return record

    async def update(self, score_id: str, **fields: Any) -> ScoreRecord | None:
        current = await self.find_by_id(score_id)
        if current is None:
            return None
        updated = ScoreRecord.model_validate({**current.model_dump(), **fields})
        await self._write(
            "update_score",
            """
            UPDATE scores
            SET user_id = ?, task_id = ?, value = ?, reason = ?, created_at = ?
            WHERE score_id = ?
            """,
            (
                updated.user_id,
                updated.task_id,
                updated.value,
                updated.reason,
                to_db_ts(updated.created_at),
                score_id,
            ),
        )
        return updated

    async def delete(self, score_id: str) -> bool:
        count = await self._write(
            "delete_score",
            "DELETE FROM scores WHERE score_id = ?",
            (score_id,),
        )
        return count > 0

    async def find_by_user(self, user_id: str) -> list[ScoreRecord]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM scores WHERE user_id = ? ORDER BY rowid",
            (user_id,),
        )
        return [self._row_to_record(row) for row in rows]

    async def find_by_task(self, task_id: str) -> list[ScoreRecord]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM scores WHERE task_id = ? ORDER BY rowid",
            (task_id,),
        )
        return [self._row_to_record(row) for row in rows]

    async def sum_by_user(self, user_id: str) -> int:
        row = await self._fetchone(
            "SELECT COALESCE(SUM(value), 0) FROM scores WHERE user_id = ?",
            (user_id,),
        )
        return int(row[0]) if row else 0

    async def totals_by_user(self) -> list[tuple[str, int]]:
        """按用户合计并降序排列

        按账本顺序累加，用户首次出现的位置决定同分时的先后；
        sorted 是稳定排序，同分不再按其他键重排。
        """
        rows = await self._fetchall("SELECT user_id, value FROM scores ORDER BY rowid")
        totals: dict[str, int] = {}
        for user_id, value in rows:
            totals[user_id] = totals.get(user_id, 0) + value
        return sorted(totals.items(), key=lambda item: item[1], reverse=True)

    @staticmethod
    def _row_to_record(row: Any) -> ScoreRecord:
        return ScoreRecord(
            score_id=row[0],
            user_id=row[1],
            task_id=row[2],
            value=row[3],
            reason=row[4],
            created_at=from_db_ts(row[5]),
        )
