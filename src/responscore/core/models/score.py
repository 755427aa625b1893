"""ScoreRecord Domain Model

积分账本 append-only：只允许插入，不允许更新或删除。
同一 (user_id, task_id) 可有多条记录。
"""

from datetime import datetime

from pydantic import BaseModel, Field
from ulid import ULID


class ScoreRecord(BaseModel):
    """ScoreRecord 数据模型"""

    score_id: str = Field(description="唯一标识，ULID 格式")
    user_id: str = Field(description="获得积分的 user_id")
    task_id: str = Field(description="关联的 Task ID")
    value: int = Field(description="积分值，可为负")
    reason: str = Field(description="可读的积分原因")
    created_at: datetime = Field(description="记账时间")


class ScoreDraft(BaseModel):
    """评分规则产出的积分草稿（尚未分配 ID 和时间）"""

    user_id: str
    task_id: str
    value: int
    reason: str

    def to_record(self, created_at: datetime) -> ScoreRecord:
        return ScoreRecord(
            score_id=str(ULID()),
            created_at=created_at,
            **self.model_dump(),
        )
