"""ResponScore Core Services -- 业务服务导出

服务不持有全局状态，StoreGroup 由组合根显式注入。
"""

from .reaction_service import ReactionService
from .score_service import ScoreService
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "ReactionService",
    "ScoreService",
    "TaskService",
    "UserService",
]
