"""Core 异常体系

NotFoundError 在任何写入之前抛出；StorageError 包装持久化协作方的失败，
core 不做重试，直接交给调用方。
"""


class ResponScoreError(Exception):
    """Core 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方重试整个逻辑操作是否可能成功
        """
        super().__init__(message)
        self.recoverable = recoverable


class NotFoundError(ResponScoreError):
    """引用的实体不存在，操作在写入前中止"""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}", recoverable=False)
        self.entity = entity
        self.entity_id = entity_id


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str) -> None:
        super().__init__("Task", task_id)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


class StorageError(ResponScoreError):
    """持久化层失败（SQLite 错误等），原样向上传递"""

    def __init__(self, operation: str, original_error: Exception) -> None:
        """
        Args:
            operation: 失败的存储操作名称
            original_error: 原始异常
        """
        super().__init__(
            f"storage operation failed: {operation} -- {original_error}",
            recoverable=True,
        )
        self.operation = operation
        self.original_error = original_error
