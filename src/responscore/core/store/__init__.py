"""ResponScore Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
Store 实例由组合根（CLI / gateway lifespan / 测试）创建并注入服务，core 不持有全局实例。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

from .reaction_store import SqliteReactionStore
from .score_store import SqliteScoreStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .user_store import SqliteUserStore

log = structlog.get_logger()


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.user_store = SqliteUserStore(conn)
        self.task_store = SqliteTaskStore(conn)
        self.reaction_store = SqliteReactionStore(conn)
        self.score_store = SqliteScoreStore(conn)

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)

    log.debug("store_group_created", db_path=db_path)
    return StoreGroup(conn=conn)


@asynccontextmanager
async def open_store_group(db_path: str) -> AsyncIterator[StoreGroup]:
    """短生命周期使用（CLI 命令）：退出时关闭连接"""
    store_group = await create_store_group(db_path)
    try:
        yield store_group
    finally:
        await store_group.close()


__all__ = [
    "StoreGroup",
    "create_store_group",
    "open_store_group",
    "SqliteUserStore",
    "SqliteTaskStore",
    "SqliteReactionStore",
    "SqliteScoreStore",
    "init_db",
]
