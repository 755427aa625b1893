"""反应路由

POST /api/tasks/{task_id}/reactions: 对任务按下反应印章。
- 201: 记录成功，返回反应、新增积分与更新后的任务
- 404: 任务或用户不存在
- 503: 存储失败（已完成的步骤不回滚）
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from responscore.core.exceptions import StorageError, TaskNotFoundError, UserNotFoundError
from responscore.core.models import ReactionType
from responscore.core.services import ReactionService

from ..deps import error_response, get_store_group

router = APIRouter()


class AddReactionRequest(BaseModel):
    user_id: str
    type: ReactionType


@router.post("/api/tasks/{task_id}/reactions", status_code=201)
async def add_reaction(
    task_id: str,
    body: AddReactionRequest,
    store_group=Depends(get_store_group),
):
    service = ReactionService(store_group)
    try:
        return await service.add_reaction(task_id, body.user_id, body.type)
    except TaskNotFoundError as e:
        return error_response(404, "TASK_NOT_FOUND", str(e))
    except UserNotFoundError as e:
        return error_response(404, "USER_NOT_FOUND", str(e))
    except StorageError as e:
        return error_response(503, "STORAGE_FAILURE", str(e))
