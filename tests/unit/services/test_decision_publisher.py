import pytest
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.adapter.services.logging_enforcement_sink import LoggingEnforcementSink
from src.app.services.decision_publisher import DecisionPublisher
from src.app.services.enforcement_sink import EnforcementDecision
from src.app.services.unit_of_work import PersistenceError
from src.domain.entities import DecisionSource


def _decision(target, active=True, source=DecisionSource.session):
    return EnforcementDecision(target=target, active=active, source=source, session_id=uuid4())


@pytest.mark.asyncio
async def test_publish_only_changes():
    sink = LoggingEnforcementSink()
    publisher = DecisionPublisher(sink)
    decision = _decision("com.instagram.android")

    first = await publisher.publish([decision])
    second = await publisher.publish([decision])

    assert first == [decision]
    assert second == []
    assert sink.history == [decision]


@pytest.mark.asyncio
async def test_vanished_target_is_pushed_inactive():
    sink = LoggingEnforcementSink()
    publisher = DecisionPublisher(sink)
    decision = _decision("twitter.com")
    await publisher.publish([decision])

    changed = await publisher.publish([])

    assert len(changed) == 1
    assert changed[0].target == "twitter.com"
    assert changed[0].active is False
    assert changed[0].session_id == decision.session_id
    # Nothing left to switch off
    assert await publisher.publish([]) == []


@pytest.mark.asyncio
async def test_goal_duplicates_collapse_to_active():
    publisher = DecisionPublisher(LoggingEnforcementSink())
    inactive = _decision("reddit.com", active=False, source=DecisionSource.goal)
    active = _decision("reddit.com", active=True, source=DecisionSource.goal)

    changed = await publisher.publish([inactive, active])

    assert changed == [active]


@pytest.mark.asyncio
async def test_same_target_from_session_and_goal_kept_apart():
    sink = LoggingEnforcementSink()
    publisher = DecisionPublisher(sink)

    await publisher.publish(
        [_decision("reddit.com"), _decision("reddit.com", source=DecisionSource.goal)]
    )

    assert set(sink.latest) == {"session:reddit.com", "goal:reddit.com"}


@pytest.mark.asyncio
async def test_refresh_after_commit_swallows_storage_failure():
    sink = LoggingEnforcementSink()
    publisher = DecisionPublisher(sink)
    publisher.refresh = AsyncMock(side_effect=PersistenceError("database is locked"))

    decisions, changed = await publisher.refresh_after_commit(MagicMock(), datetime.now(UTC))

    assert decisions == []
    assert changed == []
    assert sink.history == []
