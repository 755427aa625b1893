"""Reaction Domain Model

同一 (task_id, user_id) 任意时刻至多一条存活反应，新反应覆盖旧反应。
is_first_reaction_for_task 在创建时计算一次，之后即使旧记录被覆盖删除也不回溯修改。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import ReactionType


class Reaction(BaseModel):
    """Reaction 数据模型"""

    reaction_id: str = Field(description="唯一标识，ULID 格式")
    task_id: str = Field(description="关联的 Task ID")
    user_id: str = Field(description="反应者 user_id")
    type: ReactionType = Field(description="反应类型")
    created_at: datetime = Field(description="反应时间")
    is_first_reaction_for_task: bool = Field(
        default=False,
        description="创建时该用户在此任务上是否不存在存活反应",
    )
