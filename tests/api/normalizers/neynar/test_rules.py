"""Testes das cadeias de regras por campo."""

from __future__ import annotations

from api.normalizers.neynar import rules
from api.normalizers.neynar._coercion import coerce_id, coerce_text


def test_path_reads_nested_keys() -> None:
    assert rules.path("user", "fid")({"user": {"fid": 9}}) == 9
    assert rules.path("user", "fid")({"user": "alice"}) is None
    assert rules.path("missing")({}) is None


def test_first_non_null_value_wins_in_order() -> None:
    data = {"user": {"fid": 2}, "user_fid": 3, "from_fid": 5}
    assert rules.extract(data, rules.FOLLOW_ACTOR_ID, coerce_id) == 2


def test_actor_id_falls_through_to_later_rules() -> None:
    assert rules.extract({"follower_fid": "11"}, rules.FOLLOW_ACTOR_ID, coerce_id) == 11
    assert rules.extract({"from_fid": 12}, rules.FOLLOW_ACTOR_ID, coerce_id) == 12


def test_present_but_invalid_value_does_not_fall_through() -> None:
    """Valor presente e inválido não pula para o próximo caminho."""
    data = {"actor_fid": "abc", "user_fid": 4}
    assert rules.extract(data, rules.FOLLOW_ACTOR_ID, coerce_id) is None


def test_target_name_chain() -> None:
    data = {"target": {"username": "bob"}, "target_username": "other"}
    assert rules.extract(data, rules.FOLLOW_TARGET_NAME, coerce_text) == "bob"


def test_any_present_ignores_empty_values() -> None:
    assert rules.any_present({"parent_hash": ""}, rules.POST_PARENT_CAST_REFS) is False
    assert rules.any_present({"parent": {}}, rules.POST_PARENT_CAST_REFS) is False
    assert rules.any_present({"parent": {"hash": "0xabc"}}, rules.POST_PARENT_CAST_REFS) is True
    assert rules.any_present({"rootParentHash": "0x1"}, rules.POST_PARENT_CAST_REFS) is True


def test_trade_chain_prefers_transaction_network() -> None:
    data = {"transaction": {"network": {"name": "base"}}, "chain": "optimism"}
    assert rules.extract(data, rules.TRADE_CHAIN, coerce_text) == "base"
