from __future__ import annotations

import json

import pytest
from pydantic import BaseModel, ValidationError

from models import Node, Player
from rules import RuleKey, RuleSet, TransactionAvailability, is_transaction_available, load_rule_set


def test_rule_set_is_pydantic_model_with_defaults() -> None:
    rules = RuleSet()
    assert isinstance(rules, BaseModel)
    assert rules.get_value(RuleKey.FUEL_STATION_PRICE) == 200
    assert rules[RuleKey.LASER_BATTLES_ALLOWED] is True


def test_upper_case_keys_are_accepted() -> None:
    rules = RuleSet.model_validate({"FUEL_STATION_PRICE": 50, "NODE_BUYBACK_AVAILABILITY": "NEVER"})
    assert rules.fuel_station_price == 50
    assert rules.get_value("NODE_BUYBACK_AVAILABILITY") == TransactionAvailability.NEVER


def test_unknown_rule_key_fails_fast() -> None:
    with pytest.raises(KeyError):
        RuleSet().get_value("NOT_A_RULE")


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValidationError):
        RuleSet.model_validate({"FUEL_STATION_COST": 5})


def test_fuel_thresholds_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        RuleSet(minimum_fuel=5, low_fuel=2)
    with pytest.raises(ValidationError):
        RuleSet(low_fuel=40, maximum_fuel=30)


def test_negative_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        RuleSet(laser_battle_fuel_cost=-1)


def test_rule_set_is_frozen() -> None:
    rules = RuleSet()
    with pytest.raises(ValidationError):
        rules.fuel_station_price = 1


def test_with_values_returns_validated_copy() -> None:
    rules = RuleSet()
    cheaper = rules.with_values(FUEL_STATION_PRICE=10)
    assert cheaper.fuel_station_price == 10
    assert rules.fuel_station_price == 200
    with pytest.raises(ValidationError):
        rules.with_values(maximum_fuel=0)


def test_load_rule_set_reads_json(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"LASER_BATTLE_FUEL_COST": 0, "BYPASS_ALLOWED": True}))
    rules = load_rule_set(path)
    assert rules.laser_battle_fuel_cost == 0
    assert rules.bypass_allowed is True
    assert rules.maximum_fuel == RuleSet().maximum_fuel


def test_load_rule_set_applies_overrides_in_either_spelling(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"FUEL_STATION_PRICE": 5, "low_fuel": 4}))
    rules = load_rule_set(path, overrides={"fuel_station_price": 9, "LOW_FUEL": 6})
    assert rules.fuel_station_price == 9
    assert rules.low_fuel == 6
    assert load_rule_set(path).fuel_station_price == 5


@pytest.mark.parametrize(
    ("policy", "start", "owned", "rival", "unowned"),
    [
        (TransactionAvailability.ALWAYS, True, True, True, True),
        (TransactionAvailability.NEVER, False, False, False, False),
        (TransactionAvailability.START_NODE_ONLY, True, False, False, False),
        (TransactionAvailability.OWNED_NODE_ONLY, False, True, False, False),
        (TransactionAvailability.UNOWNED_NODE_ONLY, True, False, False, True),
    ],
)
def test_transaction_availability(policy, start, owned, rival, unowned) -> None:
    me = Player(number=1, name="A")
    other = Player(number=2, name="B")
    start_node = Node(id="s", is_start_node=True)
    owned_node = Node(id="o", price=10, owner=me)
    rival_node = Node(id="r", price=10, owner=other)
    unowned_node = Node(id="u", price=10)
    assert is_transaction_available(policy, start_node, me) is start
    assert is_transaction_available(policy, owned_node, me) is owned
    assert is_transaction_available(policy, rival_node, me) is rival
    assert RuleSet.is_transaction_available(policy, unowned_node, me) is unowned


def test_owned_policy_without_player_accepts_any_owner() -> None:
    node = Node(id="o", price=10, owner=Player(number=2, name="B"))
    assert is_transaction_available(TransactionAvailability.OWNED_NODE_ONLY, node)
