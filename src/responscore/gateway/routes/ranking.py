"""排行榜路由

GET /api/ranking?period=all|week|month: 排行榜（week/month 为占位，积分为 0）
GET /api/ranking/top3: 前三名
GET /api/ranking/users/{user_id}: 单个用户统计（含上周积分）
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from responscore.core.models import RankingEntry, RankingPeriod
from responscore.core.services import ScoreService

from ..deps import error_response, get_store_group

router = APIRouter()


class RankingResponse(BaseModel):
    period: RankingPeriod
    ranking: list[RankingEntry]


@router.get("/api/ranking", response_model=RankingResponse)
async def get_ranking(
    period: RankingPeriod = Query(default=RankingPeriod.ALL, description="统计区间"),
    store_group=Depends(get_store_group),
):
    ranking = await ScoreService(store_group).overall_ranking(period)
    return RankingResponse(period=period, ranking=ranking)


@router.get("/api/ranking/top3", response_model=RankingResponse)
async def get_top3(store_group=Depends(get_store_group)):
    ranking = await ScoreService(store_group).monthly_top3()
    return RankingResponse(period=RankingPeriod.ALL, ranking=ranking)


@router.get("/api/ranking/users/{user_id}")
async def get_user_stats(user_id: str, store_group=Depends(get_store_group)):
    stats = await ScoreService(store_group).get_user_ranking_stats(user_id)
    if stats is None:
        return error_response(404, "USER_NOT_FOUND", f"User with id {user_id} does not exist")
    return stats
