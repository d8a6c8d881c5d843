"""Testes do use case de processamento do webhook (pipeline completo em memória)."""

from __future__ import annotations

import pytest

from api.normalizers.neynar import NeynarEventNormalizer
from app.domain.profile import ProfileSnapshot
from app.infra.stores.memory_stores import MemoryIdempotencyStore, MemorySnapshotStore
from app.infra.stores.profile_cache import ProfileCache
from app.services.dispatcher import NotificationDispatcher
from app.services.profile_diff import ProfileDiffEngine
from app.use_cases.neynar import ProcessingOutcome, ProcessWebhookEventUseCase
from app.use_cases.neynar.process_webhook_event import display_name_for
from tests.fakes.fake_notification_sender import FakeNotificationSender
from tests.fakes.fake_profile_lookup import FakeProfileLookup
from utils.errors import ProfileLookupError

NOW_MS = 1_704_067_200_000


def _build(
    lookup: FakeProfileLookup | None = None,
    sender: FakeNotificationSender | None = None,
) -> tuple[ProcessWebhookEventUseCase, FakeProfileLookup, FakeNotificationSender]:
    lookup = lookup or FakeProfileLookup()
    sender = sender or FakeNotificationSender()
    cache = ProfileCache(lookup)
    use_case = ProcessWebhookEventUseCase(
        idempotency=MemoryIdempotencyStore(capacity=100),
        normalizer=NeynarEventNormalizer(now_ms=lambda: NOW_MS),
        profile_cache=cache,
        diff_engine=ProfileDiffEngine(cache, MemorySnapshotStore()),
        dispatcher=NotificationDispatcher(sender, "follow-chat", "activity-chat", "trade-chat"),
    )
    return use_case, lookup, sender


FOLLOW_E1 = {"id": "e1", "type": "follow.created", "data": {"actor_fid": 3, "target_fid": 42}}


@pytest.mark.asyncio
async def test_follow_without_names_looks_up_both_ids_once() -> None:
    lookup = FakeProfileLookup({3: ProfileSnapshot(name="alice"), 42: ProfileSnapshot(name="bob")})
    use_case, lookup, sender = _build(lookup=lookup)

    result = await use_case.execute(FOLLOW_E1)

    assert result.outcome is ProcessingOutcome.DISPATCHED
    assert lookup.calls == [[3, 42]]
    assert len(sender.sent) == 1
    chat_id, text = sender.sent[0]
    assert chat_id == "follow-chat"
    assert ">alice</a> <b>FOLLOWED</b> <a" in text
    assert text.endswith(">bob</a>\n01/01 07:00")


@pytest.mark.asyncio
async def test_duplicate_delivery_is_not_dispatched_again() -> None:
    use_case, _, sender = _build()

    first = await use_case.execute(FOLLOW_E1)
    second = await use_case.execute(FOLLOW_E1)

    assert first.outcome is ProcessingOutcome.DISPATCHED
    assert second.outcome is ProcessingOutcome.DUPLICATE
    assert len(sender.sent) == 1


@pytest.mark.asyncio
async def test_embedded_usernames_skip_lookup() -> None:
    use_case, lookup, sender = _build()
    payload = {
        "id": "e2",
        "type": "follow.deleted",
        "data": {
            "user": {"fid": 3, "username": "alice"},
            "target_user": {"fid": 42, "username": "bob"},
        },
    }

    await use_case.execute(payload)

    assert lookup.calls == []
    assert "<b>UNFOLLOWED</b>" in sender.sent[0][1]


@pytest.mark.asyncio
async def test_lookup_failure_falls_back_to_placeholders() -> None:
    use_case, _, sender = _build(lookup=FakeProfileLookup(error=ProfileLookupError("down")))

    result = await use_case.execute(FOLLOW_E1)

    assert result.outcome is ProcessingOutcome.DISPATCHED
    assert ">id:3</a>" in sender.sent[0][1]
    assert ">id:42</a>" in sender.sent[0][1]


@pytest.mark.asyncio
async def test_profile_update_bio_change() -> None:
    use_case, _, sender = _build()
    payload = {
        "id": "u1",
        "type": "user.updated",
        "data": {
            "fid": 5,
            "username": "erin",
            "before": {"bio": "a"},
            "after": {"bio": "b"},
        },
    }

    result = await use_case.execute(payload)

    chat_id, text = sender.sent[0]
    assert result.outcome is ProcessingOutcome.DISPATCHED
    assert chat_id == "activity-chat"
    assert text.splitlines()[1:] == ["BIO: a → b", "01/01 07:00"]


@pytest.mark.asyncio
async def test_missing_identifiers_send_diagnostic() -> None:
    use_case, _, sender = _build()

    result = await use_case.execute({"id": "bad", "type": "follow.created", "data": {"actor_fid": 3}})

    assert result.outcome is ProcessingOutcome.MISSING_IDENTIFIERS
    chat_id, text = sender.sent[0]
    assert chat_id == "follow-chat"
    assert "<pre>" in text
    assert "follow.created" in text


@pytest.mark.asyncio
async def test_non_root_post_is_skipped() -> None:
    use_case, _, sender = _build()
    payload = {"id": "c1", "type": "cast.created", "data": {"author_fid": 7, "parent_hash": "0x1"}}

    result = await use_case.execute(payload)

    assert result.outcome is ProcessingOutcome.NON_ROOT_POST
    assert sender.sent == []


@pytest.mark.asyncio
async def test_root_post_in_channel_is_dispatched() -> None:
    use_case, _, sender = _build()
    payload = {
        "id": "c2",
        "type": "cast.created",
        "data": {
            "author": {"fid": 7, "username": "carol"},
            "text": "gm",
            "parent_url": "https://warpcast.com/~/channel/dev",
        },
    }

    result = await use_case.execute(payload)

    assert result.outcome is ProcessingOutcome.DISPATCHED
    assert sender.sent[0][0] == "activity-chat"
    assert "<b>CASTED</b>" in sender.sent[0][1]


@pytest.mark.asyncio
async def test_trade_goes_to_trade_chat() -> None:
    use_case, _, sender = _build()
    payload = {
        "id": "t1",
        "type": "trade.created",
        "created_at": 1_704_067_200,
        "data": {"trader": {"fid": 9, "username": "dave"}},
    }

    await use_case.execute(payload)

    assert sender.sent[0][0] == "trade-chat"
    assert "<b>SWAPPED</b>" in sender.sent[0][1]


@pytest.mark.asyncio
async def test_unknown_type_is_ignored() -> None:
    use_case, _, sender = _build()

    result = await use_case.execute({"id": "r1", "type": "reaction.created", "data": {}})

    assert result.outcome is ProcessingOutcome.UNSUPPORTED_TYPE
    assert sender.sent == []


@pytest.mark.asyncio
async def test_failed_delivery_is_reported_not_raised() -> None:
    use_case, _, _ = _build(sender=FakeNotificationSender(error=RuntimeError("sink down")))

    result = await use_case.execute(FOLLOW_E1)

    assert result.outcome is ProcessingOutcome.NOT_DELIVERED


def test_display_name_prefers_username() -> None:
    assert display_name_for(1, ProfileSnapshot(name="a", display_name="A")) == "a"
    assert display_name_for(1, ProfileSnapshot(display_name="A")) == "A"
    assert display_name_for(1, None) == "id:1"
