"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查 -- 四张表齐全、WAL 生效、数据库目录磁盘空间。
"""

import shutil
from pathlib import Path

import aiosqlite
import structlog
from fastapi import APIRouter, Request
from responscore.core.config import get_db_path
from responscore.core.store.sqlite_init import verify_wal_mode
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()

_REQUIRED_TABLES = {"users", "tasks", "reactions", "scores"}


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    checks: dict[str, object] = {}
    all_ok = True

    conn = request.app.state.store_group.conn
    try:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = sorted(_REQUIRED_TABLES - tables)
        if missing:
            checks["sqlite"] = f"missing tables: {', '.join(missing)}"
            all_ok = False
        else:
            checks["sqlite"] = "ok"
        checks["wal"] = await verify_wal_mode(conn)
    except aiosqlite.Error as e:
        log.warning("readiness_sqlite_failed", error=str(e))
        checks["sqlite"] = f"error: {e}"
        all_ok = False

    try:
        usage = shutil.disk_usage(Path(get_db_path()).parent)
        checks["disk_space_mb"] = usage.free // (1024 * 1024)
    except OSError:
        checks["disk_space_mb"] = 0
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
