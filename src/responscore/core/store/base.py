"""SQLite Store 公共基类

统一把 aiosqlite 错误包装为 StorageError；写操作逐条提交，
调用方中途失败时已完成的步骤保持生效。
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

import aiosqlite
import structlog

from ..exceptions import StorageError
from ..timeutils import as_utc

log = structlog.get_logger()


def to_db_ts(value: datetime | None) -> str | None:
    """datetime -> UTC ISO 文本（统一时区以保证按文本排序即按时间排序）"""
    if value is None:
        return None
    return as_utc(value).isoformat()


def from_db_ts(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


class SqliteStoreBase:
    """各 Store 共享同一个连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def _fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[Any]:
        try:
            cursor = await self._conn.execute(sql, params)
            return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            raise StorageError("select", e) from e

    async def _fetchone(self, sql: str, params: Sequence[Any] = ()) -> Any | None:
        try:
            cursor = await self._conn.execute(sql, params)
            return await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError("select", e) from e

    async def _write(self, operation: str, sql: str, params: Sequence[Any]) -> int:
        """执行写语句并提交，返回受影响行数"""
        try:
            cursor = await self._conn.execute(sql, params)
            await self._conn.commit()
            return cursor.rowcount
        except aiosqlite.Error as e:
            await self._rollback(operation)
            raise StorageError(operation, e) from e

    async def _rollback(self, operation: str) -> None:
        # 回滚失败只记录，调用方收到的仍是原始写入错误
        try:
            await self._conn.rollback()
        except (aiosqlite.Error, ValueError) as e:
            log.warning("rollback_failed", operation=operation, error=str(e))
