"""任务路由

GET  /api/tasks: 任务列表查询，支持 status 筛选。
POST /api/tasks: 创建任务。
GET  /api/tasks/{task_id}: 任务详情，含 reactions + score_records。
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from responscore.core.exceptions import NotFoundError
from responscore.core.models import TaskStatus, TaskView
from responscore.core.services import ReactionService, ScoreService, TaskService

from ..deps import error_response, get_store_group

router = APIRouter()


class CreateTaskRequest(BaseModel):
    """创建任务请求体；assignee_ids 可为 ["all"] 表示全员"""

    title: str = Field(min_length=1, max_length=200)
    detail: str = ""
    assigner_id: str
    assignee_ids: list[str] = Field(min_length=1)
    deadline: datetime | None = None


class TaskListResponse(BaseModel):
    tasks: list[TaskView]


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    store_group=Depends(get_store_group),
):
    tasks = await TaskService(store_group).list_tasks(status)
    return TaskListResponse(tasks=tasks)


@router.post("/api/tasks", status_code=201)
async def create_task(body: CreateTaskRequest, store_group=Depends(get_store_group)):
    try:
        return await TaskService(store_group).create_task(
            title=body.title,
            detail=body.detail,
            assigner_id=body.assigner_id,
            assignee_ids=body.assignee_ids,
            deadline=body.deadline,
        )
    except NotFoundError as e:
        return error_response(404, "USER_NOT_FOUND", str(e))


@router.get("/api/tasks/{task_id}")
async def get_task_detail(task_id: str, store_group=Depends(get_store_group)):
    """查询任务详情，包含关联的反应与积分记录"""
    task = await TaskService(store_group).get_task(task_id)
    if task is None:
        return error_response(404, "TASK_NOT_FOUND", f"Task with id {task_id} does not exist")

    reactions = await ReactionService(store_group).list_reactions_for_task(task_id)
    scores = await ScoreService(store_group).list_scores_for_task(task_id)
    return {
        "task": task.model_dump(mode="json"),
        "reactions": [r.model_dump(mode="json") for r in reactions],
        "score_records": [s.model_dump(mode="json") for s in scores],
    }
