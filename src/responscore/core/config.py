"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、评分档位、广播指派哨兵值等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("RESPONSCORE_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "RESPONSCORE_DB_PATH",
        str(_get_base_dir() / "sqlite" / "responscore.db"),
    )


# 广播指派哨兵值：assignee_ids 含此值表示「所有已知用户」
BROADCAST_ASSIGNEE: str = "all"

# 首次反应评分档位：(经过分钟上限, 分值)，按上限升序匹配
SCORE_BUCKETS: tuple[tuple[int, int], ...] = (
    (1, 5),
    (5, 4),
    (30, 3),
    (120, 2),
    (1440, 1),
)

# 超过最后一档（24 小时）仍未反应的扣分
OVERDUE_PENALTY: int = -5

# done 反应的完成奖励
DONE_BONUS: int = 3

# 排行榜授予名次（奖牌）的席位数
RANKED_SLOTS: int = 3

# 视图中引用对象缺失时的占位名称
UNKNOWN_USER_NAME: str = "unknown user"
UNKNOWN_TASK_NAME: str = "unknown task"
