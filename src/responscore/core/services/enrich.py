"""视图组装 -- 把领域实体附加上用户名 / 任务标题

名称映射由调用方一次性读取后传入，避免逐条查询。
"""

from collections.abc import Iterable, Mapping

from ..config import UNKNOWN_TASK_NAME, UNKNOWN_USER_NAME
from ..models.enums import ReactionType
from ..models.reaction import Reaction
from ..models.score import ScoreRecord
from ..models.task import Task
from ..models.views import ReactionView, ScoreRecordView, TaskView


def user_name(names: Mapping[str, str], user_id: str) -> str:
    return names.get(user_id, UNKNOWN_USER_NAME)


def task_title(titles: Mapping[str, str], task_id: str) -> str:
    return titles.get(task_id, UNKNOWN_TASK_NAME)


def completed_by_all(
    task: Task,
    known_user_ids: Iterable[str],
    task_reactions: Iterable[Reaction],
) -> bool:
    """实际被指派者是否全部存在存活的 done 反应"""
    done_users = {
        r.user_id
        for r in task_reactions
        if r.task_id == task.task_id and r.type == ReactionType.DONE
    }
    return all(uid in done_users for uid in task.effective_assignees(known_user_ids))


def task_view(
    task: Task,
    names: Mapping[str, str],
    task_reactions: list[Reaction],
) -> TaskView:
    effective = task.effective_assignees(names.keys())
    return TaskView(
        **task.model_dump(),
        assigner_name=user_name(names, task.assigner_id),
        assignee_names=[user_name(names, uid) for uid in effective],
        reaction_count=len(task_reactions),
        latest_reaction_time=max((r.created_at for r in task_reactions), default=None),
        all_assignees_completed=completed_by_all(task, names.keys(), task_reactions),
    )


def reaction_view(
    reaction: Reaction,
    names: Mapping[str, str],
    titles: Mapping[str, str],
) -> ReactionView:
    return ReactionView(
        **reaction.model_dump(),
        user_name=user_name(names, reaction.user_id),
        task_title=task_title(titles, reaction.task_id),
    )


def score_view(
    record: ScoreRecord,
    names: Mapping[str, str],
    titles: Mapping[str, str],
) -> ScoreRecordView:
    return ScoreRecordView(
        **record.model_dump(),
        user_name=user_name(names, record.user_id),
        task_title=task_title(titles, record.task_id),
    )
