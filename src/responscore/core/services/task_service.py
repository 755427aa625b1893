"""TaskService -- 任务创建 / 查询 / 完成判定

完成判定（all_assignees_completed）每次调用都重新读取用户与反应，
不做缓存，因此能反映反应覆盖：用户把 done 改成其他反应后不再计为完成。
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from ulid import ULID

from ..config import BROADCAST_ASSIGNEE
from ..exceptions import TaskNotFoundError, UserNotFoundError
from ..models import Task, TaskStatus, TaskView
from ..store import StoreGroup
from ..timeutils import as_utc, now_utc
from .enrich import completed_by_all, task_view

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._stores = store_group
        self._clock = clock

    async def create_task(
        self,
        title: str,
        detail: str,
        assigner_id: str,
        assignee_ids: list[str],
        deadline: datetime | None = None,
    ) -> TaskView:
        """创建任务（初始状态 unread）

        Raises:
            UserNotFoundError: 指派者或显式指派的用户不存在
        """
        for user_id in [assigner_id, *assignee_ids]:
            if user_id == BROADCAST_ASSIGNEE:
                continue
            if await self._stores.user_store.find_by_id(user_id) is None:
                raise UserNotFoundError(user_id)

        task = Task(
            task_id=str(ULID()),
            title=title,
            detail=detail,
            assigner_id=assigner_id,
            assignee_ids=assignee_ids,
            created_at=self._clock(),
            deadline=as_utc(deadline) if deadline else None,
            status=TaskStatus.UNREAD,
        )
        await self._stores.task_store.create(task)
        log.info(
            "task_created",
            task_id=task.task_id,
            assigner_id=assigner_id,
            broadcast=task.is_broadcast,
        )
        return await self.to_view(task)

    async def get_task(self, task_id: str) -> TaskView | None:
        """查询任务详情"""
        task = await self._stores.task_store.find_by_id(task_id)
        if task is None:
            return None
        return await self.to_view(task)

    async def require_task(self, task_id: str) -> Task:
        task = await self._stores.task_store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def list_tasks(self, status: TaskStatus | None = None) -> list[TaskView]:
        """查询任务列表，支持按状态筛选"""
        if status:
            tasks = await self._stores.task_store.find_by_status(status)
        else:
            tasks = await self._stores.task_store.find_all()
        return await self._to_views(tasks)

    async def list_tasks_for_assignee(self, user_id: str) -> list[TaskView]:
        tasks = await self._stores.task_store.find_by_assignee(user_id)
        return await self._to_views(tasks)

    async def list_tasks_for_assigner(self, user_id: str) -> list[TaskView]:
        tasks = await self._stores.task_store.find_by_assigner(user_id)
        return await self._to_views(tasks)

    async def all_assignees_completed(self, task: Task) -> bool:
        """所有实际被指派者是否都已 done

        广播任务按调用时的用户集合展开。
        """
        users = await self._stores.user_store.find_all()
        reactions = await self._stores.reaction_store.find_by_task(task.task_id)
        return completed_by_all(task, [u.user_id for u in users], reactions)

    async def to_view(self, task: Task) -> TaskView:
        return (await self._to_views([task]))[0]

    async def _to_views(self, tasks: list[Task]) -> list[TaskView]:
        users = await self._stores.user_store.find_all()
        names = {u.user_id: u.name for u in users}
        views = []
        for task in tasks:
            reactions = await self._stores.reaction_store.find_by_task(task.task_id)
            views.append(task_view(task, names, reactions))
        return views
