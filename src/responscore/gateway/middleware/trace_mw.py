"""TraceMiddleware

从路径中提取任务 / 用户标识并绑定到 structlog contextvars：
- /api/tasks/{task_id}[/reactions] -> trace_id=trace-{task_id}
- /api/users/{user_id}、/api/ranking/users/{user_id} -> subject_user_id
同一任务的反应、状态变化、积分日志可按 trace_id 串联。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def trace_context_for_path(path: str) -> dict[str, str]:
    parts = [p for p in path.split("/") if p]
    context: dict[str, str] = {}
    for i, part in enumerate(parts[:-1]):
        if part == "tasks":
            context["trace_id"] = f"trace-{parts[i + 1]}"
        elif part == "users":
            context["subject_user_id"] = parts[i + 1]
    return context


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        context = trace_context_for_path(request.url.path)
        if context:
            structlog.contextvars.bind_contextvars(**context)

        return await call_next(request)
