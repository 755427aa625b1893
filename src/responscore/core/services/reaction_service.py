"""ReactionService -- 反应记录与积分发放

add_reaction 流程：
1. 校验任务与用户存在（不存在则在任何写入前抛出 NotFoundError）
2. 删除该用户在该任务上的存活反应（覆盖语义）
3. 写入新反应，is_first_reaction_for_task = 步骤 2 前不存在存活反应
4. 按写入时重读的任务状态推进状态机（条件更新，done 不会被并发反应改回）
5. 按评分规则写入 0~2 条积分记录
6. 返回附带名称的反应、新积分记录与最新任务视图

各步骤逐条提交，中途失败时已完成步骤保留，异常原样抛给调用方。
同一用户的并发反应不做冲突检测，最后写入者生效。
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from ulid import ULID

from ..exceptions import UserNotFoundError
from ..models import (
    Reaction,
    ReactionResult,
    ReactionType,
    ReactionView,
    ScoreRecord,
    next_status,
)
from ..scoring import records_for_reaction
from ..store import StoreGroup
from ..timeutils import now_utc
from .enrich import reaction_view, score_view
from .task_service import TaskService

log = structlog.get_logger()


class ReactionService:
    """反应业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._stores = store_group
        self._clock = clock
        self._tasks = TaskService(store_group, clock)

    async def add_reaction(
        self,
        task_id: str,
        user_id: str,
        reaction_type: ReactionType,
    ) -> ReactionResult:
        """记录反应并发放积分

        Args:
            task_id: 任务 ID
            user_id: 反应者 ID
            reaction_type: 反应类型

        Returns:
            ReactionResult（反应视图、本次新增积分、更新后的任务视图）

        Raises:
            TaskNotFoundError / UserNotFoundError: 引用不存在，未产生任何写入
            StorageError: 存储失败，已完成的步骤不回滚
        """
        reaction_type = ReactionType(reaction_type)
        task = await self._tasks.require_task(task_id)
        user = await self._stores.user_store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        # 覆盖：先删除旧反应，历史积分不撤回
        existing = await self._stores.reaction_store.find_by_task_and_user(task_id, user_id)
        for prior in existing:
            await self._stores.reaction_store.delete(prior.reaction_id)
        if existing:
            log.info(
                "reaction_overwritten",
                task_id=task_id,
                user_id=user_id,
                previous_types=[r.type.value for r in existing],
            )

        reaction = Reaction(
            reaction_id=str(ULID()),
            task_id=task_id,
            user_id=user_id,
            type=reaction_type,
            created_at=self._clock(),
            is_first_reaction_for_task=not existing,
        )
        await self._stores.reaction_store.create(reaction)
        log.info(
            "reaction_recorded",
            task_id=task_id,
            user_id=user_id,
            reaction_type=reaction_type.value,
            is_first=reaction.is_first_reaction_for_task,
        )

        await self._advance_status(task_id, reaction_type)

        created: list[ScoreRecord] = []
        for draft in records_for_reaction(task, reaction):
            record = draft.to_record(reaction.created_at)
            await self._stores.score_store.create(record)
            created.append(record)
            log.info(
                "score_recorded",
                task_id=task_id,
                user_id=user_id,
                value=record.value,
                reason=record.reason,
            )

        names = {user.user_id: user.name}
        titles = {task.task_id: task.title}
        updated_task = await self._tasks.require_task(task_id)
        return ReactionResult(
            reaction=reaction_view(reaction, names, titles),
            score_records=[score_view(r, names, titles) for r in created],
            task=await self._tasks.to_view(updated_task),
        )

    async def _advance_status(self, task_id: str, reaction_type: ReactionType) -> None:
        """按写入时的最新状态推进；条件更新落空说明状态已被并发改写，重读后再判定"""
        while True:
            current = await self._tasks.require_task(task_id)
            new_status = next_status(current.status, reaction_type)
            if new_status == current.status:
                return
            if await self._stores.task_store.update_status(
                task_id, current.status, new_status
            ):
                log.info(
                    "task_status_changed",
                    task_id=task_id,
                    from_status=current.status.value,
                    to_status=new_status.value,
                )
                return

    async def delete_reaction(self, reaction_id: str) -> bool:
        """删除反应（不影响任务状态和已发放积分）"""
        deleted = await self._stores.reaction_store.delete(reaction_id)
        if deleted:
            log.info("reaction_deleted", reaction_id=reaction_id)
        return deleted

    async def get_reaction(self, reaction_id: str) -> ReactionView | None:
        reaction = await self._stores.reaction_store.find_by_id(reaction_id)
        if reaction is None:
            return None
        return (await self._to_views([reaction]))[0]

    async def list_reactions(self) -> list[ReactionView]:
        return await self._to_views(await self._stores.reaction_store.find_all())

    async def list_reactions_for_task(self, task_id: str) -> list[ReactionView]:
        return await self._to_views(await self._stores.reaction_store.find_by_task(task_id))

    async def list_reactions_for_user(self, user_id: str) -> list[ReactionView]:
        return await self._to_views(await self._stores.reaction_store.find_by_user(user_id))

    async def _to_views(self, reactions: list[Reaction]) -> list[ReactionView]:
        users = await self._stores.user_store.find_all()
        tasks = await self._stores.task_store.find_all()
        names = {u.user_id: u.name for u in users}
        titles = {t.task_id: t.title for t in tasks}
        return [reaction_view(r, names, titles) for r in reactions]
