"""CLI 入口模块 -- python -m responscore.core <command>

支持的命令：
  init-db     初始化数据库表结构
  seed-demo   写入演示用户 / 任务 / 反应
  ranking     打印全期间排行榜
"""

import asyncio
import sys

from .config import get_db_path

_COMMANDS = {
    "init-db": "初始化数据库表结构",
    "seed-demo": "写入演示用户 / 任务 / 反应",
    "ranking": "打印全期间排行榜",
}


def _print_usage() -> None:
    print("用法: python -m responscore.core <command>")
    print("命令:")
    for name, description in _COMMANDS.items():
        print(f"  {name:<10}  {description}")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _print_usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "seed-demo":
        asyncio.run(seed_demo_data())
    elif command == "ranking":
        asyncio.run(print_ranking())
    else:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(_COMMANDS)}")
        sys.exit(1)


async def init_database() -> None:
    from .store import open_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")
    async with open_store_group(db_path):
        pass
    print("初始化完成")


async def seed_demo_data() -> None:
    from .seed import seed_demo
    from .store import open_store_group

    async with open_store_group(get_db_path()) as store_group:
        seeded = await seed_demo(store_group)
    print("演示数据写入完成" if seeded else "已存在用户数据，跳过")


async def print_ranking() -> None:
    from .services.score_service import ScoreService
    from .store import open_store_group

    async with open_store_group(get_db_path()) as store_group:
        ranking = await ScoreService(store_group).overall_ranking()

    if not ranking:
        print("暂无积分记录")
        return
    for entry in ranking:
        medal = f"#{entry.rank}" if entry.rank else "  "
        print(
            f"{medal:>3} {entry.user_name:<20} {entry.total_score:>5}  "
            f"avg {entry.average_first_reaction_time_minutes} min"
        )


if __name__ == "__main__":
    main()
