"""演示数据 -- 写入示例用户 / 任务，并经由 ReactionService 回放示例反应

反应通过正式流程写入，积分记录由评分规则生成，与真实数据同构。
"""

from datetime import UTC, datetime

import structlog

from .models import ReactionType, Task, TaskStatus, User
from .services.reaction_service import ReactionService
from .store import StoreGroup

log = structlog.get_logger()

DEMO_USERS: list[tuple[str, str]] = [
    ("user1", "Taro Tanaka"),
    ("user2", "Hanako Sato"),
    ("user3", "Jiro Suzuki"),
    ("user4", "Misaki Ito"),
    ("user5", "Kenichi Watanabe"),
]

# (task_id, title, detail, assigner, assignees, created_at, deadline)
DEMO_TASKS: list[tuple[str, str, str, str, list[str], datetime, datetime | None]] = [
    (
        "task1",
        "Prepare November invoices",
        "Create invoices for every client for November and send them by mail.",
        "user1",
        ["user2"],
        datetime(2025, 11, 19, 9, 0, tzinfo=UTC),
        datetime(2025, 11, 21, tzinfo=UTC),
    ),
    (
        "task2",
        "Review financial statements",
        "Review the closing report and list the required corrections.",
        "user1",
        ["user3", "user4"],
        datetime(2025, 11, 19, 10, 30, tzinfo=UTC),
        datetime(2025, 11, 22, tzinfo=UTC),
    ),
    (
        "task3",
        "Client A monthly report",
        "Submit the monthly tax report for client A.",
        "user2",
        ["user4"],
        datetime(2025, 11, 19, 11, 15, tzinfo=UTC),
        datetime(2025, 11, 23, tzinfo=UTC),
    ),
    (
        "task4",
        "Check withholding slips",
        "Check employee withholding slips for mistakes.",
        "user3",
        ["user5"],
        datetime(2025, 11, 18, 14, 45, tzinfo=UTC),
        datetime(2025, 11, 20, tzinfo=UTC),
    ),
    (
        "task5",
        "Verify payroll system update",
        "Confirm the new payroll system works correctly.",
        "user2",
        ["all"],
        datetime(2025, 11, 19, 13, 0, tzinfo=UTC),
        None,
    ),
]

# (task_id, user_id, type, reacted_at)
DEMO_REACTIONS: list[tuple[str, str, ReactionType, datetime]] = [
    ("task1", "user2", ReactionType.ACK, datetime(2025, 11, 19, 9, 2, tzinfo=UTC)),
    ("task1", "user2", ReactionType.DONE, datetime(2025, 11, 19, 14, 30, tzinfo=UTC)),
    ("task2", "user3", ReactionType.LATER, datetime(2025, 11, 19, 10, 45, tzinfo=UTC)),
    ("task4", "user5", ReactionType.ACK, datetime(2025, 11, 18, 15, 0, tzinfo=UTC)),
    ("task4", "user5", ReactionType.DONE, datetime(2025, 11, 18, 16, 20, tzinfo=UTC)),
    ("task5", "user1", ReactionType.WORKING, datetime(2025, 11, 19, 13, 5, tzinfo=UTC)),
]


async def seed_demo(store_group: StoreGroup) -> bool:
    """写入演示数据；已有用户时跳过

    Returns:
        True 如果写入了数据
    """
    if await store_group.user_store.find_all():
        log.info("seed_skipped", reason="users_exist")
        return False

    for user_id, name in DEMO_USERS:
        await store_group.user_store.create(User(user_id=user_id, name=name))

    for task_id, title, detail, assigner, assignees, created_at, deadline in DEMO_TASKS:
        await store_group.task_store.create(
            Task(
                task_id=task_id,
                title=title,
                detail=detail,
                assigner_id=assigner,
                assignee_ids=assignees,
                created_at=created_at,
                deadline=deadline,
                status=TaskStatus.UNREAD,
            )
        )

    for task_id, user_id, reaction_type, reacted_at in DEMO_REACTIONS:
        service = ReactionService(store_group, clock=lambda ts=reacted_at: ts)
        await service.add_reaction(task_id, user_id, reaction_type)

    log.info(
        "seed_completed",
        users=len(DEMO_USERS),
        tasks=len(DEMO_TASKS),
        reactions=len(DEMO_REACTIONS),
    )
    return True
