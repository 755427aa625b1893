"""ScoreService -- 积分账本查询与排行榜聚合

排行榜按合计降序；同分保持账本枚举顺序（稳定排序，不引入次级排序键）。
周 / 月区间过滤尚未实现，对应统计值统一报告 0。
"""

from collections.abc import Callable
from datetime import datetime

import structlog

from ..config import RANKED_SLOTS
from ..models import RankingEntry, RankingPeriod, ScoreRecord, ScoreRecordView
from ..scoring import average_first_reaction_minutes, score_change_percent
from ..store import StoreGroup
from ..timeutils import now_utc, previous_week_end, previous_week_start
from .enrich import score_view, user_name

log = structlog.get_logger()


class ScoreService:
    """积分与排行业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._stores = store_group
        self._clock = clock

    async def total_score_by_user(
        self,
        period: RankingPeriod = RankingPeriod.ALL,
    ) -> dict[str, int]:
        """user_id -> 合计积分（按合计降序的插入顺序）

        WEEK / MONTH 为占位实现：账本中出现的用户一律为 0。
        """
        totals = await self._stores.score_store.totals_by_user()
        if period != RankingPeriod.ALL:
            log.debug("ranking_period_not_implemented", period=period.value)
            return {user_id: 0 for user_id, _ in totals}
        return dict(totals)

    async def overall_ranking(
        self,
        period: RankingPeriod = RankingPeriod.ALL,
    ) -> list[RankingEntry]:
        """排行榜：前 RANKED_SLOTS 名带 rank，其余为 None"""
        totals = await self.total_score_by_user(period)
        users = await self._stores.user_store.find_all()
        tasks = await self._stores.task_store.find_all()
        reactions = await self._stores.reaction_store.find_all()
        names = {u.user_id: u.name for u in users}

        ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
        return [
            RankingEntry(
                user_id=user_id,
                user_name=user_name(names, user_id),
                total_score=total,
                average_first_reaction_time_minutes=average_first_reaction_minutes(
                    user_id, tasks, reactions, names.keys()
                ),
                rank=index + 1 if index < RANKED_SLOTS else None,
            )
            for index, (user_id, total) in enumerate(ordered)
        ]

    async def monthly_top3(self) -> list[RankingEntry]:
        ranking = await self.overall_ranking()
        return ranking[:RANKED_SLOTS]

    async def get_user_total_score(self, user_id: str) -> int:
        return await self._stores.score_store.sum_by_user(user_id)

    async def get_user_ranking_stats(self, user_id: str) -> RankingEntry | None:
        """单个用户的统计（含上周积分与变化率），用户不存在返回 None"""
        user = await self._stores.user_store.find_by_id(user_id)
        if user is None:
            return None

        total = await self._stores.score_store.sum_by_user(user_id)
        previous_week = await self._previous_week_score(user_id)
        users = await self._stores.user_store.find_all()
        tasks = await self._stores.task_store.find_all()
        reactions = await self._stores.reaction_store.find_all()

        top3 = await self.monthly_top3()
        rank = next((e.rank for e in top3 if e.user_id == user_id), None)

        return RankingEntry(
            user_id=user_id,
            user_name=user.name,
            total_score=total,
            previous_week_score=previous_week,
            score_change_percent=score_change_percent(total, previous_week),
            average_first_reaction_time_minutes=average_first_reaction_minutes(
                user_id, tasks, reactions, [u.user_id for u in users]
            ),
            rank=rank,
        )

    async def list_scores(self) -> list[ScoreRecordView]:
        return await self._to_views(await self._stores.score_store.find_all())

    async def list_scores_for_user(self, user_id: str) -> list[ScoreRecordView]:
        return await self._to_views(await self._stores.score_store.find_by_user(user_id))

    async def list_scores_for_task(self, task_id: str) -> list[ScoreRecordView]:
        return await self._to_views(await self._stores.score_store.find_by_task(task_id))

    async def _previous_week_score(self, user_id: str) -> int:
        now = self._clock()
        start, end = previous_week_start(now), previous_week_end(now)
        records = await self._stores.score_store.find_by_user(user_id)
        return sum(r.value for r in records if start <= r.created_at <= end)

    async def _to_views(self, records: list[ScoreRecord]) -> list[ScoreRecordView]:
        users = await self._stores.user_store.find_all()
        tasks = await self._stores.task_store.find_all()
        names = {u.user_id: u.name for u in users}
        titles = {t.task_id: t.title for t in tasks}
        return [score_view(r, names, titles) for r in records]
