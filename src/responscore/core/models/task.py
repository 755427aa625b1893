"""Task Domain Model

status 只允许由反应驱动的状态流转修改；
assignee_ids 可包含广播哨兵值，表示所有已知用户。
"""

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from ..config import BROADCAST_ASSIGNEE
from .enums import TaskStatus


class Task(BaseModel):
    """Task 数据模型

    广播指派在查询时针对当前用户集合展开，从不以展开后的列表持久化，
    因此新加入的用户自动成为未完成广播任务的指派对象。
    """

    task_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(description="任务标题")
    detail: str = Field(default="", description="任务详情")
    assigner_id: str = Field(description="指派者 user_id")
    assignee_ids: list[str] = Field(
        min_length=1,
        description="被指派者 user_id 列表，可含广播哨兵值",
    )
    created_at: datetime = Field(description="创建时间")
    deadline: datetime | None = Field(default=None, description="截止时间（可选）")
    status: TaskStatus = Field(default=TaskStatus.UNREAD, description="当前状态")

    @property
    def is_broadcast(self) -> bool:
        return BROADCAST_ASSIGNEE in self.assignee_ids

    def effective_assignees(self, known_user_ids: Iterable[str]) -> list[str]:
        """解析实际被指派者集合

        Args:
            known_user_ids: 当前所有已知用户 ID

        Returns:
            广播任务返回全部已知用户，否则返回 assignee_ids 本身
        """
        if self.is_broadcast:
            return list(known_user_ids)
        return list(self.assignee_ids)

    def is_assigned_to(self, user_id: str) -> bool:
        return self.is_broadcast or user_id in self.assignee_ids
