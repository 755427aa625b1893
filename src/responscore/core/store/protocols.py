"""Store Protocol 接口定义

定义 UserStore、TaskStore、ReactionStore、ScoreStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
所有方法均为异步，失败时抛出 StorageError。
"""

from typing import Any, Protocol

from ..models.enums import TaskStatus
from ..models.reaction import Reaction
from ..models.score import ScoreRecord
from ..models.task import Task
from ..models.user import User


class UserStore(Protocol):
    """User 存储接口"""

    async def find_all(self) -> list[User]:
        """查询所有用户（按创建顺序）"""
        ...

    async def find_by_id(self, user_id: str) -> User | None:
        ...

    async def create(self, user: User) -> User:
        ...

    async def update(self, user_id: str, **fields: Any) -> User | None:
        """部分更新，用户不存在时返回 None"""
        ...

    async def delete(self, user_id: str) -> bool:
        ...

    async def find_by_name(self, name: str) -> User | None:
        ...


class TaskStore(Protocol):
    """Task 存储接口"""

    async def find_all(self) -> list[Task]:
        """查询所有任务，按 created_at 倒序"""
        ...

    async def find_by_id(self, task_id: str) -> Task | None:
        ...

    async def create(self, task: Task) -> Task:
        ...

    async def update(self, task_id: str, **fields: Any) -> Task | None:
        """部分更新，任务不存在时返回 None"""
        ...

    async def update_status(
        self, task_id: str, expected: TaskStatus, status: TaskStatus
    ) -> bool:
        """当前状态等于 expected 时才写入，返回是否写入"""
        ...

    async def delete(self, task_id: str) -> bool:
        ...

    async def find_by_assignee(self, user_id: str) -> list[Task]:
        """查询指派给用户的任务（含广播任务）"""
        ...

    async def find_by_assigner(self, user_id: str) -> list[Task]:
        ...

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        ...


class ReactionStore(Protocol):
    """Reaction 存储接口"""

    async def find_all(self) -> list[Reaction]:
        ...

    async def find_by_id(self, reaction_id: str) -> Reaction | None:
        ...

    async def create(self, reaction: Reaction) -> Reaction:
        ...

    async def update(self, reaction_id: str, **fields: Any) -> Reaction | None:
        ...

    async def delete(self, reaction_id: str) -> bool:
        ...

    async def find_by_task(self, task_id: str) -> list[Reaction]:
        ...

    async def find_by_user(self, user_id: str) -> list[Reaction]:
        ...

    async def find_by_task_and_user(self, task_id: str, user_id: str) -> list[Reaction]:
        """查询某用户在某任务上的存活反应（正常情况下至多一条）"""
        ...

    async def find_first_reaction_for_task(self, task_id: str) -> Reaction | None:
        """首次标记的反应中时间最早的一条"""
        ...


class ScoreStore(Protocol):
    """ScoreRecord 存储接口

    账本 append-only：正常流程只调用 create。
    """

    async def find_all(self) -> list[ScoreRecord]:
        """按记账顺序查询全部积分记录"""
        ...

    async def find_by_id(self, score_id: str) -> ScoreRecord | None:
        ...

    async def create(self, record: ScoreRecord) -> ScoreRecord:
        ...

    async def update(self, score_id: str, **fields: Any) -> ScoreRecord | None:
        ...

    async def delete(self, score_id: str) -> bool:
        ...

    async def find_by_user(self, user_id: str) -> list[ScoreRecord]:
        ...

    async def find_by_task(self, task_id: str) -> list[ScoreRecord]:
        ...

    async def sum_by_user(self, user_id: str) -> int:
        ...

    async def totals_by_user(self) -> list[tuple[str, int]]:
        """按用户分组求和，按合计降序；同分保持账本枚举顺序"""
        ...
