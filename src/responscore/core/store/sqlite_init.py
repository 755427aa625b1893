"""SQLite 数据库初始化

PRAGMA 配置 + 四张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id  TEXT PRIMARY KEY,
    name     TEXT NOT NULL
);
"""

_USERS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_users_name ON users(name);",
]

# tasks 表 DDL（assignee_ids 为 JSON 数组，广播哨兵值原样存储）
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id       TEXT PRIMARY KEY,
    title         TEXT NOT NULL DEFAULT '',
    detail        TEXT NOT NULL DEFAULT '',
    assigner_id   TEXT NOT NULL,
    assignee_ids  TEXT NOT NULL DEFAULT '[]',
    created_at    TEXT NOT NULL,
    deadline      TEXT,
    status        TEXT NOT NULL DEFAULT 'unread'
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assigner ON tasks(assigner_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at DESC);",
]

# reactions 表 DDL
_REACTIONS_DDL = """
CREATE TABLE IF NOT EXISTS reactions (
    reaction_id                 TEXT PRIMARY KEY,
    task_id                     TEXT NOT NULL,
    user_id                     TEXT NOT NULL,
    type                        TEXT NOT NULL,
    created_at                  TEXT NOT NULL,
    is_first_reaction_for_task  INTEGER NOT NULL DEFAULT 0,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id)
);
"""

_REACTIONS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_reactions_task_user ON reactions(task_id, user_id);",
    "CREATE INDEX IF NOT EXISTS idx_reactions_user ON reactions(user_id);",
]

# scores 表 DDL（append-only 账本）
_SCORES_DDL = """
CREATE TABLE IF NOT EXISTS scores (
    score_id    TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL,
    task_id     TEXT NOT NULL,
    value       INTEGER NOT NULL,
    reason      TEXT NOT NULL DEFAULT '',
    created_at  TEXT NOT NULL,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id)
);
"""

_SCORES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_scores_user ON scores(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_scores_task ON scores(task_id);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    for ddl in (_USERS_DDL, _TASKS_DDL, _REACTIONS_DDL, _SCORES_DDL):
        await conn.execute(ddl)

    # 创建索引
    for idx_sql in _USERS_INDEXES + _TASKS_INDEXES + _REACTIONS_INDEXES + _SCORES_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
