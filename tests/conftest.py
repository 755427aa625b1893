"""全局 pytest 配置 -- 临时 SQLite 数据库 + Store 实例组 + 可控时钟"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from responscore.core.models import Task, TaskStatus, User
from responscore.core.store import StoreGroup
from responscore.core.store.sqlite_init import init_db

# 测试基准时间（周三）
T0 = datetime(2025, 11, 19, 9, 0, tzinfo=UTC)


class FakeClock:
    """可手动推进的时钟，替代 now_utc 注入服务"""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now

    def at(self, **kwargs: float) -> datetime:
        """把时钟设置为 T0 + 偏移"""
        self.now = T0 + timedelta(**kwargs)
        return self.now


@pytest_asyncio.fixture
async def db_conn(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    conn = await aiosqlite.connect(str(tmp_path / "test.db"))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def stores(db_conn: aiosqlite.Connection) -> StoreGroup:
    """共享连接的 Store 实例组"""
    return StoreGroup(db_conn)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_user(stores: StoreGroup):
    """工厂：创建用户"""

    async def _make(user_id: str, name: str | None = None) -> User:
        return await stores.user_store.create(
            User(user_id=user_id, name=name or user_id.title())
        )

    return _make


@pytest.fixture
def make_task(stores: StoreGroup):
    """工厂：直接写入任务（绕过 TaskService 以便控制 created_at / status）"""

    async def _make(
        task_id: str = "task-1",
        assignee_ids: list[str] | None = None,
        assigner_id: str = "boss",
        created_at: datetime = T0,
        status: TaskStatus = TaskStatus.UNREAD,
        title: str = "Quarterly report",
    ) -> Task:
        return await stores.task_store.create(
            Task(
                task_id=task_id,
                title=title,
                detail="",
                assigner_id=assigner_id,
                assignee_ids=assignee_ids or ["alice"],
                created_at=created_at,
                status=status,
            )
        )

    return _make
