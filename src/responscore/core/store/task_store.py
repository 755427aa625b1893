"""TaskStore SQLite 实现

assignee_ids 以 JSON 数组存储；按被指派者查询时广播任务同样命中。
"""

import json
from typing import Any

from ..config import BROADCAST_ASSIGNEE
from ..models.enums import TaskStatus
from ..models.task import Task
from .base import SqliteStoreBase, from_db_ts, to_db_ts

_COLUMNS = (
    "task_id, title, detail, assigner_id, assignee_ids, created_at, deadline, status"
)


class SqliteTaskStore(SqliteStoreBase):
    """TaskStore 的 SQLite 实现"""

    async def find_all(self) -> list[Task]:
        """查询全部任务，按 created_at 倒序"""
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at DESC"
        )
        return [self._row_to_task(row) for row in rows]

    async def find_by_id(self, task_id: str) -> Task | None:
        row = await self._fetchone(
            f"SELECT {_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        return self._row_to_task(row) if row else None

    async def create(self, task: Task) -> Task:
        await self._write(
            "create_task",
            f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            self._task_to_params(task),
        )
        return task

    async def update(self, task_id: str, **fields: Any) -> Task | None:
        """部分更新：读取当前记录合并字段后整行写回"""
        current = await self.find_by_id(task_id)
        if current is None:
            return None
        updated = Task.model_validate({**current.model_dump(), **fields})
        params = self._task_to_params(updated)
        await self._write(
            "update_task",
            """
            UPDATE tasks
            SET title = ?, detail = ?, assigner_id = ?, assignee_ids = ?,
                created_at = ?, deadline = ?, status = ?
            WHERE task_id = ?
            """,
            (*params[1:], task_id),
        )
        return updated

    async def update_status(
        self,
        task_id: str,
        expected: TaskStatus,
        status: TaskStatus,
    ) -> bool:
        """条件更新状态：仅当当前状态仍为 expected 时写入 status 列

        Returns:
            是否写入成功；False 表示任务不存在或状态已被其他写入改变
        """
        count = await self._write(
            "update_task_status",
            "UPDATE tasks SET status = ? WHERE task_id = ? AND status = ?",
            (TaskStatus(status).value, task_id, TaskStatus(expected).value),
        )
        return count > 0

    async def delete(self, task_id: str) -> bool:
        count = await self._write(
            "delete_task",
            "DELETE FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        return count > 0

    async def find_by_assignee(self, user_id: str) -> list[Task]:
        """显式指派或广播指派给 user_id 的任务"""
        rows = await self._fetchall(
            f"""
            SELECT {_COLUMNS} FROM tasks
            WHERE EXISTS (
                SELECT 1 FROM json_each(tasks.assignee_ids)
                WHERE json_each.value IN (?, ?)
            )
            ORDER BY created_at DESC
            """,
            (user_id, BROADCAST_ASSIGNEE),
        )
        return [self._row_to_task(row) for row in rows]

    async def find_by_assigner(self, user_id: str) -> list[Task]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM tasks WHERE assigner_id = ? ORDER BY created_at DESC",
            (user_id,),
        )
        return [self._row_to_task(row) for row in rows]

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        rows = await self._fetchall(
            f"SELECT {_COLUMNS} FROM tasks WHERE status = ? ORDER BY created_at DESC",
            (TaskStatus(status).value,),
        )
        return [self._row_to_task(row) for row in rows]

    @staticmethod
    def _task_to_params(task: Task) -> tuple:
        return (
            task.task_id,
            task.title,
            task.detail,
            task.assigner_id,
            json.dumps(task.assignee_ids, ensure_ascii=False),
            to_db_ts(task.created_at),
            to_db_ts(task.deadline),
            task.status.value,
        )

    @staticmethod
    def _row_to_task(row: Any) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            title=row[1],
            detail=row[2],
            assigner_id=row[3],
            assignee_ids=json.loads(row[4]),
            created_at=from_db_ts(row[5]),
            deadline=from_db_ts(row[6]),
            status=TaskStatus(row[7]),
        )
