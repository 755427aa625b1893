"""用户路由

GET  /api/users: 用户列表（含积分统计）
POST /api/users: 创建用户
GET  /api/users/{user_id}: 用户详情
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from responscore.core.models import UserStats
from responscore.core.services import UserService

from ..deps import error_response, get_store_group

router = APIRouter()


class CreateUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class UserListResponse(BaseModel):
    users: list[UserStats]


@router.get("/api/users", response_model=UserListResponse)
async def list_users(store_group=Depends(get_store_group)):
    users = await UserService(store_group).list_users()
    return UserListResponse(users=users)


@router.post("/api/users", status_code=201, response_model=UserStats)
async def create_user(body: CreateUserRequest, store_group=Depends(get_store_group)):
    return await UserService(store_group).create_user(body.name)


@router.get("/api/users/{user_id}")
async def get_user(user_id: str, store_group=Depends(get_store_group)):
    user = await UserService(store_group).get_user(user_id)
    if user is None:
        return error_response(404, "USER_NOT_FOUND", f"User with id {user_id} does not exist")
    return user
