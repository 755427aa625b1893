"""依赖注入与错误响应

StoreGroup 在 lifespan 中挂到 app.state，路由通过 Depends(get_store_group) 取用。
错误统一为 {"error": {"code", "message"}}。
"""

import structlog
from fastapi import Request
from responscore.core.exceptions import StorageError
from responscore.core.store import StoreGroup
from starlette.responses import JSONResponse

log = structlog.get_logger()


def get_store_group(request: Request) -> StoreGroup:
    return request.app.state.store_group


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """未在路由内处理的 StorageError -> 503"""
    log.error(
        "storage_failure",
        operation=exc.operation,
        error=str(exc.original_error),
    )
    return error_response(503, "STORAGE_FAILURE", str(exc))
