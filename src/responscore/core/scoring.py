"""评分规则 -- 纯函数

首次反应按任务创建到反应的经过时间计分；done 反应另加完成奖励。
本模块不做任何 I/O，调用方负责把 ScoreDraft 落盘。
"""

from collections.abc import Iterable

from .config import DONE_BONUS, OVERDUE_PENALTY, SCORE_BUCKETS
from .models.enums import ReactionType
from .models.reaction import Reaction
from .models.score import ScoreDraft
from .models.task import Task
from .timeutils import elapsed_minutes


def score_for_elapsed(minutes: int) -> int:
    """经过分钟数 -> 分值

    边界值（1/5/30/120/1440）归入较高一档；0 或负数（时钟偏差）按 ≤1 处理。
    """
    for upper, value in SCORE_BUCKETS:
        if minutes <= upper:
            return value
    return OVERDUE_PENALTY


def first_reaction_score_record(task: Task, reaction: Reaction) -> ScoreDraft | None:
    """首次反应的时效积分，非首次反应返回 None"""
    if not reaction.is_first_reaction_for_task:
        return None

    value = score_for_elapsed(elapsed_minutes(task.created_at, reaction.created_at))
    return ScoreDraft(
        user_id=reaction.user_id,
        task_id=task.task_id,
        value=value,
        reason=f"first reaction ({reaction.type.value}) {value:+d}",
    )


def done_bonus_record(task: Task, reaction: Reaction) -> ScoreDraft | None:
    """done 反应的完成奖励，与是否首次无关"""
    if reaction.type != ReactionType.DONE:
        return None

    return ScoreDraft(
        user_id=reaction.user_id,
        task_id=task.task_id,
        value=DONE_BONUS,
        reason=f"completion bonus ({DONE_BONUS:+d})",
    )


def records_for_reaction(task: Task, reaction: Reaction) -> list[ScoreDraft]:
    """一次反应应产生的积分草稿（0~2 条）

    顺序固定：首次反应积分在前，完成奖励在后。
    """
    drafts = [
        first_reaction_score_record(task, reaction),
        done_bonus_record(task, reaction),
    ]
    return [d for d in drafts if d is not None]


def average_first_reaction_minutes(
    user_id: str,
    tasks: Iterable[Task],
    reactions: Iterable[Reaction],
    known_user_ids: Iterable[str],
) -> float:
    """用户的平均首次反应时间（分钟，保留一位小数）

    仅统计该用户为实际被指派者、且存在其首次反应的任务；
    同一任务有多条首次标记时取最早一条。无可统计任务时返回 0。
    """
    known = list(known_user_ids)
    first_by_task: dict[str, Reaction] = {}
    for r in reactions:
        if r.user_id != user_id or not r.is_first_reaction_for_task:
            continue
        current = first_by_task.get(r.task_id)
        if current is None or r.created_at < current.created_at:
            first_by_task[r.task_id] = r

    samples = [
        elapsed_minutes(task.created_at, first_by_task[task.task_id].created_at)
        for task in tasks
        if task.task_id in first_by_task and user_id in task.effective_assignees(known)
    ]
    if not samples:
        return 0
    return round(sum(samples) / len(samples), 1)


def score_change_percent(current: int, previous: int) -> int:
    """相对上一周期的变化百分比，上一周期为 0 时返回 0"""
    if previous == 0:
        return 0
    return round((current - previous) / previous * 100)
