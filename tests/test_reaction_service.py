"""ReactionService 测试

测试内容：
1. 首次反应计分 + 状态推进
2. 覆盖语义：每个 (任务, 用户) 只保留一条存活反应，历史积分不撤回
3. is_first_reaction_for_task 在写入时冻结
4. 引用不存在时在任何写入前失败
5. 存储失败原样抛出，已完成步骤保留
6. 不同用户并发反应时 done 不被改回
"""

import asyncio

import pytest
import pytest_asyncio
from responscore.core.exceptions import StorageError, TaskNotFoundError, UserNotFoundError
from responscore.core.models import ReactionType, TaskStatus
from responscore.core.services import ReactionService, TaskService


@pytest.fixture
def service(stores, clock):
    return ReactionService(stores, clock=clock)


@pytest_asyncio.fixture
async def single_task(make_user, make_task):
    await make_user("boss")
    await make_user("alice")
    return await make_task("task-1", assignee_ids=["alice"])


class TestAddReaction:
    async def test_first_ack_scores_by_elapsed_time(self, service, stores, clock, single_task):
        clock.at(minutes=3)
        result = await service.add_reaction("task-1", "alice", ReactionType.ACK)

        assert result.reaction.is_first_reaction_for_task is True
        assert result.reaction.user_name == "Alice"
        assert result.reaction.task_title == "Quarterly report"
        assert result.task.status == TaskStatus.IN_PROGRESS
        assert result.task.all_assignees_completed is False
        assert result.task.reaction_count == 1
        assert result.task.latest_reaction_time == clock.now

        assert len(result.score_records) == 1
        record = result.score_records[0]
        assert record.value == 4
        assert "first reaction" in record.reason
        assert record.created_at == clock.now

        task = await stores.task_store.find_by_id("task-1")
        assert task.status == TaskStatus.IN_PROGRESS
        assert await TaskService(stores).all_assignees_completed(task) is False

    async def test_done_overwrites_and_adds_bonus(self, service, stores, clock, single_task):
        clock.at(minutes=3)
        await service.add_reaction("task-1", "alice", ReactionType.ACK)
        clock.at(hours=2)
        result = await service.add_reaction("task-1", "alice", ReactionType.DONE)

        assert result.reaction.is_first_reaction_for_task is False
        assert result.task.status == TaskStatus.DONE
        assert result.task.all_assignees_completed is True
        assert [r.value for r in result.score_records] == [3]
        assert "completion bonus" in result.score_records[0].reason

        live = await stores.reaction_store.find_by_task_and_user("task-1", "alice")
        assert len(live) == 1
        assert live[0].type == ReactionType.DONE

        # 历史积分不撤回：4 + 3
        scores = await stores.score_store.find_by_task("task-1")
        assert sum(s.value for s in scores) == 7

    async def test_first_reaction_done_yields_two_records(self, service, clock, single_task):
        clock.at(seconds=30)
        result = await service.add_reaction("task-1", "alice", ReactionType.DONE)

        assert [r.value for r in result.score_records] == [5, 3]
        assert result.task.status == TaskStatus.DONE

    async def test_overdue_first_reaction_is_penalized(self, service, clock, single_task):
        clock.at(days=2)
        result = await service.add_reaction("task-1", "alice", ReactionType.LATER)

        assert [r.value for r in result.score_records] == [-5]
        assert result.task.status == TaskStatus.IN_PROGRESS

    async def test_reaction_type_accepts_plain_string(self, service, single_task):
        result = await service.add_reaction("task-1", "alice", "working")
        assert result.reaction.type == ReactionType.WORKING

    async def test_done_is_absorbing(self, service, stores, clock, single_task):
        await service.add_reaction("task-1", "alice", ReactionType.DONE)
        clock.advance(minutes=10)
        result = await service.add_reaction("task-1", "alice", ReactionType.ACK)

        assert result.task.status == TaskStatus.DONE
        assert result.score_records == []
        # done 被覆盖后不再计为完成
        assert result.task.all_assignees_completed is False


class TestFirstReactionFlag:
    async def test_flag_frozen_after_overwrite(self, service, stores, clock, single_task):
        clock.at(minutes=1)
        await service.add_reaction("task-1", "alice", ReactionType.ACK)
        clock.at(minutes=20)
        await service.add_reaction("task-1", "alice", ReactionType.LATER)
        clock.at(minutes=40)
        await service.add_reaction("task-1", "alice", ReactionType.WORKING)

        live = await stores.reaction_store.find_by_task("task-1")
        assert len(live) == 1
        assert live[0].is_first_reaction_for_task is False
        # 首次反应的积分只发一次
        scores = await stores.score_store.find_by_task("task-1")
        assert [s.value for s in scores] == [5]

    async def test_flag_is_per_user(self, service, stores, clock, make_user, make_task):
        await make_user("alice")
        await make_user("bob")
        await make_task("task-1", assignee_ids=["alice", "bob"])

        clock.at(minutes=2)
        first = await service.add_reaction("task-1", "alice", ReactionType.ACK)
        clock.at(minutes=45)
        second = await service.add_reaction("task-1", "bob", ReactionType.ACK)

        assert first.reaction.is_first_reaction_for_task is True
        assert second.reaction.is_first_reaction_for_task is True
        assert [r.value for r in second.score_records] == [2]


class TestNotFound:
    async def test_unknown_task(self, service, stores, single_task):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await service.add_reaction("missing", "alice", ReactionType.ACK)

        assert exc_info.value.recoverable is False
        assert await stores.reaction_store.find_all() == []
        assert await stores.score_store.find_all() == []

    async def test_unknown_user(self, service, stores, single_task):
        with pytest.raises(UserNotFoundError):
            await service.add_reaction("task-1", "ghost", ReactionType.DONE)

        assert await stores.reaction_store.find_all() == []
        assert await stores.score_store.find_all() == []
        task = await stores.task_store.find_by_id("task-1")
        assert task.status == TaskStatus.UNREAD


class TestStorageFailure:
    async def test_score_write_failure_propagates(
        self, service, stores, monkeypatch, single_task
    ):
        async def failing_create(record):
            raise StorageError("create_score", RuntimeError("disk full"))

        monkeypatch.setattr(stores.score_store, "create", failing_create)

        with pytest.raises(StorageError):
            await service.add_reaction("task-1", "alice", ReactionType.ACK)

        # 已完成的步骤不回滚
        assert len(await stores.reaction_store.find_by_task("task-1")) == 1
        task = await stores.task_store.find_by_id("task-1")
        assert task.status == TaskStatus.IN_PROGRESS


class TestQueries:
    async def test_list_and_get(self, service, clock, make_user, make_task):
        await make_user("alice")
        await make_user("bob")
        await make_task("task-1", assignee_ids=["alice", "bob"])

        clock.at(minutes=1)
        created = await service.add_reaction("task-1", "alice", ReactionType.ACK)
        clock.at(minutes=2)
        await service.add_reaction("task-1", "bob", ReactionType.WORKING)

        assert [r.user_id for r in await service.list_reactions()] == ["alice", "bob"]
        assert [r.user_name for r in await service.list_reactions_for_task("task-1")] == [
            "Alice",
            "Bob",
        ]
        assert len(await service.list_reactions_for_user("bob")) == 1

        fetched = await service.get_reaction(created.reaction.reaction_id)
        assert fetched.type == ReactionType.ACK
        assert await service.get_reaction("missing") is None

    async def test_delete_reaction_keeps_scores(self, service, stores, single_task):
        result = await service.add_reaction("task-1", "alice", ReactionType.ACK)

        assert await service.delete_reaction(result.reaction.reaction_id) is True
        assert await service.delete_reaction(result.reaction.reaction_id) is False
        assert len(await stores.score_store.find_all()) == 1


class TestConcurrentReactions:
    @pytest.mark.parametrize(
        "first, second",
        [
            (("bob", ReactionType.DONE), ("alice", ReactionType.ACK)),
            (("alice", ReactionType.ACK), ("bob", ReactionType.DONE)),
        ],
    )
    async def test_done_survives_concurrent_reaction(
        self, service, stores, make_user, make_task, first, second
    ):
        for user_id in ("boss", "alice", "bob"):
            await make_user(user_id)
        task_ids = [f"task-{i}" for i in range(10)]
        for task_id in task_ids:
            await make_task(task_id, assignee_ids=["alice", "bob"])

        await asyncio.gather(
            *(
                service.add_reaction(task_id, user_id, reaction_type)
                for task_id in task_ids
                for user_id, reaction_type in (first, second)
            )
        )

        for task_id in task_ids:
            task = await stores.task_store.find_by_id(task_id)
            assert task.status == TaskStatus.DONE

    async def test_stale_status_is_reread_before_write(
        self, service, stores, monkeypatch, single_task
    ):
        # 在反应写入后、状态推进前由另一方把任务标记为 done
        original_create = stores.reaction_store.create

        async def create_then_complete(reaction):
            created = await original_create(reaction)
            await stores.task_store.update("task-1", status=TaskStatus.DONE)
            return created

        monkeypatch.setattr(stores.reaction_store, "create", create_then_complete)

        result = await service.add_reaction("task-1", "alice", ReactionType.ACK)

        assert result.task.status == TaskStatus.DONE
        task = await stores.task_store.find_by_id("task-1")
        assert task.status == TaskStatus.DONE
