"""UserService -- 用户信息与积分统计"""

import structlog
from ulid import ULID

from ..models import ReactionType, User, UserStats
from ..scoring import average_first_reaction_minutes
from ..store import StoreGroup

log = structlog.get_logger()


class UserService:
    """用户业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_users(self) -> list[UserStats]:
        users = await self._stores.user_store.find_all()
        return await self._to_stats(users)

    async def get_user(self, user_id: str) -> UserStats | None:
        user = await self._stores.user_store.find_by_id(user_id)
        if user is None:
            return None
        return (await self._to_stats([user]))[0]

    async def find_user_by_name(self, name: str) -> UserStats | None:
        user = await self._stores.user_store.find_by_name(name)
        if user is None:
            return None
        return (await self._to_stats([user]))[0]

    async def create_user(self, name: str) -> UserStats:
        user = User(user_id=str(ULID()), name=name)
        await self._stores.user_store.create(user)
        log.info("user_created", user_id=user.user_id)
        return UserStats(**user.model_dump())

    async def _to_stats(self, users: list[User]) -> list[UserStats]:
        all_users = await self._stores.user_store.find_all()
        tasks = await self._stores.task_store.find_all()
        reactions = await self._stores.reaction_store.find_all()
        totals = dict(await self._stores.score_store.totals_by_user())
        known = [u.user_id for u in all_users]

        stats = []
        for user in users:
            own = [r for r in reactions if r.user_id == user.user_id]
            stats.append(
                UserStats(
                    **user.model_dump(),
                    total_score=totals.get(user.user_id, 0),
                    average_first_reaction_time_minutes=average_first_reaction_minutes(
                        user.user_id, tasks, reactions, known
                    ),
                    reaction_count=len(own),
                    completed_task_count=sum(1 for r in own if r.type == ReactionType.DONE),
                )
            )
        return stats
