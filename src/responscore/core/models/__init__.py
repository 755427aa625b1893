"""ResponScore Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    STATUS_TRANSITIONS,
    TERMINAL_STATES,
    RankingPeriod,
    ReactionType,
    TaskStatus,
    next_status,
)
from .reaction import Reaction
from .score import ScoreDraft, ScoreRecord
from .task import Task
from .user import User
from .views import (
    RankingEntry,
    ReactionResult,
    ReactionView,
    ScoreRecordView,
    TaskView,
    UserStats,
)

__all__ = [
    # 枚举
    "TaskStatus",
    "ReactionType",
    "RankingPeriod",
    # 状态机
    "STATUS_TRANSITIONS",
    "TERMINAL_STATES",
    "next_status",
    # 实体
    "User",
    "Task",
    "Reaction",
    "ScoreRecord",
    "ScoreDraft",
    # 视图
    "TaskView",
    "ReactionView",
    "ScoreRecordView",
    "UserStats",
    "RankingEntry",
    "ReactionResult",
]
