"""User Domain Model

用户由外部创建，创建后不可变。
"""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User 数据模型"""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(description="唯一标识")
    name: str = Field(min_length=1, description="显示名称")
