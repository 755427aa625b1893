"""读模型（视图）-- 在领域模型上附加展示用的名称与统计字段

引用的用户或任务缺失时填充占位名称，而不是报错。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .reaction import Reaction
from .score import ScoreRecord
from .task import Task
from .user import User


class TaskView(Task):
    """Task + 指派双方名称、反应统计、完成判定"""

    assigner_name: str
    assignee_names: list[str] = Field(default_factory=list)
    reaction_count: int = 0
    latest_reaction_time: datetime | None = None
    all_assignees_completed: bool = False


class ReactionView(Reaction):
    """Reaction + 用户名、任务标题"""

    user_name: str
    task_title: str


class ScoreRecordView(ScoreRecord):
    """ScoreRecord + 用户名、任务标题"""

    user_name: str
    task_title: str


class UserStats(User):
    """User + 积分统计"""

    total_score: int = 0
    average_first_reaction_time_minutes: float = 0
    reaction_count: int = 0
    completed_task_count: int = 0


class RankingEntry(BaseModel):
    """排行榜条目；仅前三名带 rank"""

    user_id: str
    user_name: str
    total_score: int
    previous_week_score: int = 0
    score_change_percent: int = 0
    average_first_reaction_time_minutes: float = 0
    rank: int | None = None


class ReactionResult(BaseModel):
    """add_reaction 的返回结果"""

    reaction: ReactionView
    score_records: list[ScoreRecordView] = Field(default_factory=list)
    task: TaskView
