"""枚举定义

包含 TaskStatus 状态机、ReactionType、RankingPeriod 枚举，
以及 STATUS_TRANSITIONS 流转表和 TERMINAL_STATES 终态集合。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态机：unread -> in_progress -> done"""

    UNREAD = "unread"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ReactionType(StrEnum):
    """反应（印章）类型"""

    ACK = "ack"
    LATER = "later"
    WORKING = "working"
    DONE = "done"


class RankingPeriod(StrEnum):
    """排行榜统计区间

    WEEK / MONTH 尚未实现窗口过滤，统计结果为中性值 0。
    """

    ALL = "all"
    WEEK = "week"
    MONTH = "month"


# 反应驱动的状态流转；未列出的 (状态, 反应) 组合不改变状态
STATUS_TRANSITIONS: dict[tuple[TaskStatus, ReactionType], TaskStatus] = {
    (TaskStatus.UNREAD, ReactionType.ACK): TaskStatus.IN_PROGRESS,
    (TaskStatus.UNREAD, ReactionType.LATER): TaskStatus.IN_PROGRESS,
    (TaskStatus.IN_PROGRESS, ReactionType.LATER): TaskStatus.IN_PROGRESS,
    (TaskStatus.UNREAD, ReactionType.WORKING): TaskStatus.IN_PROGRESS,
    # done 反应从任意状态进入 done
    (TaskStatus.UNREAD, ReactionType.DONE): TaskStatus.DONE,
    (TaskStatus.IN_PROGRESS, ReactionType.DONE): TaskStatus.DONE,
    (TaskStatus.DONE, ReactionType.DONE): TaskStatus.DONE,
}

# done 是吸收态，任何反应都不能离开
TERMINAL_STATES: set[TaskStatus] = {TaskStatus.DONE}


def next_status(current: TaskStatus, reaction_type: ReactionType) -> TaskStatus:
    """根据当前状态和反应类型计算下一个状态

    Args:
        current: 当前状态
        reaction_type: 收到的反应类型

    Returns:
        新状态；无对应流转时原样返回 current
    """
    return STATUS_TRANSITIONS.get((current, reaction_type), current)
