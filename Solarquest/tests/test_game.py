from __future__ import annotations

import logging

import pytest

from actions import purchase_node
from rules import RuleSet, TransactionAvailability


# ── Scenarios ─────────────────────────────────────────────────────────────────

def test_purchase_of_affordable_node(make_model) -> None:
    model = make_model("p1", cash=150)
    player = model.get_current_player()
    node = player.current_node
    assert model.is_node_purchaseable()

    purchase_node(model)
    assert player.cash == 50
    assert node.owner is player
    assert player.owns(node)


def test_purchase_refused_with_insufficient_cash(make_model) -> None:
    model = make_model("p1", cash=80)
    assert not model.is_node_purchaseable()


def test_negligence_takeover_threshold(make_model, assign) -> None:
    model = make_model("p2", "p2")
    visitor, owner = model.get_players()
    assign(model, owner, "p2")
    low = model.get_low_fuel()

    visitor.fuel = low
    assert model.is_negligence_takeover_allowed(visitor, visitor.current_node)
    visitor.fuel = low + 1
    assert not model.is_negligence_takeover_allowed(visitor, visitor.current_node)


def test_negligence_takeover_needs_stationless_foreign_node(make_model, assign) -> None:
    model = make_model("p2", "p3", fuel=0)
    visitor, owner = model.get_players()
    node = model.board.get_node("p2")
    assert not model.is_negligence_takeover_allowed()

    assign(model, owner, "p2")
    assert model.is_negligence_takeover_allowed()
    node.has_fuel_station = True
    assert not model.is_negligence_takeover_allowed()
    node.has_fuel_station = False
    assert not model.is_negligence_takeover_allowed(owner, node)


def test_placement_restricted_to_current_node(make_model, assign) -> None:
    model = make_model("p1")
    player = model.get_current_player()
    player.fuel_stations = 1
    assign(model, player, "p1", "p2")
    assert [n.id for n in model.get_fuel_station_placeable_nodes(player)] == ["p1"]

    model.set_rule_set(RuleSet(can_place_fuel_stations_on_any_node=True))
    assert [n.id for n in model.get_fuel_station_placeable_nodes(player)] == ["p1", "p2"]


# ── Totals and prices ─────────────────────────────────────────────────────────

def test_total_worth_and_node_price(make_model, assign) -> None:
    model = make_model("p1", cash=500)
    player = model.get_current_player()
    player.fuel_stations = 2
    assign(model, player, "p1", "p2")
    model.board.get_node("p2").has_fuel_station = True

    assert model.get_node_price(model.board.get_node("p1")) == 100
    assert model.get_node_price() == 100
    assert model.get_node_price(model.board.get_node("p2")) == 300
    assert model.get_total_worth(player) == 500 + 2 * 200 + 100 + 300


def test_fuel_price_delegates_to_node(make_model, assign) -> None:
    model = make_model("p1", "p3")
    visitor, owner = model.get_players()
    assert model.get_fuel_price() == 5
    assign(model, owner, "p1", "p2")
    assert model.get_fuel_price(visitor, model.board.get_node("p1")) == 10
    assert model.get_fuel_price(owner, model.board.get_node("p1")) == 0


def test_maximum_purchaseable_fuel(make_model, assign) -> None:
    model = make_model("p1", cash=12, fuel=10)
    player = model.get_current_player()
    assert model.get_maximum_purchaseable_fuel() == 2

    player.cash = 10_000
    assert model.get_maximum_purchaseable_fuel() == model.get_maximum_fuel() - 10

    assign(model, player, "p1")
    player.cash = 0
    assert model.get_maximum_purchaseable_fuel() == model.get_maximum_fuel() - 10


# ── Legality predicates ───────────────────────────────────────────────────────

def test_trade_allowed(make_model, assign) -> None:
    model = make_model("p1", "p2", cash=0)
    broke, landlord = model.get_players()
    assert not model.is_trade_allowed(broke)
    assign(model, landlord, "p5")
    assert model.is_trade_allowed(landlord)
    assert model.get_tradeable_players() == (landlord,)
    assert model.get_tradeable_players(exclude=landlord) == ()


def test_fuel_purchaseable(make_model) -> None:
    model = make_model("p1", cash=100, fuel=10)
    player = model.get_current_player()
    assert model.is_fuel_purchaseable()

    player.fuel = model.get_maximum_fuel()
    assert not model.is_fuel_purchaseable()

    player.fuel = 0
    player.cash = 4
    assert not model.is_fuel_purchaseable()

    player.cash = 100
    model.set_rule_set(RuleSet(fuel_available_on_unowned_node=TransactionAvailability.NEVER))
    assert not model.is_fuel_purchaseable()
    assert not model.is_fuel_purchaseable(player, model.get_start_node())


def test_fuel_station_purchaseable(make_model) -> None:
    model = make_model("start", "p1", cash=200)
    at_start, away = model.get_players()
    assert model.is_fuel_station_purchaseable(at_start, at_start.current_node)
    assert not model.is_fuel_station_purchaseable(away, away.current_node)

    at_start.cash = 199
    assert not model.is_fuel_station_purchaseable()
    at_start.cash = 200
    model.fuel_stations_remaining = 0
    assert not model.is_fuel_station_purchaseable()


def test_fuel_station_placeable_needs_stock(make_model, assign) -> None:
    model = make_model("p1")
    player = model.get_current_player()
    assign(model, player, "p1")
    assert not model.is_fuel_station_placeable()
    player.fuel_stations = 1
    assert model.is_fuel_station_placeable()
    model.board.get_node("p1").has_fuel_station = True
    assert not model.is_fuel_station_placeable()


def test_salable_normally_versus_debt_settlement(make_model, assign) -> None:
    model = make_model("p2")
    player = model.get_current_player()
    assert not model.is_node_salable_for_debt_settlement(player)
    assert not model.is_fuel_station_salable_for_debt_settlement(player)

    assign(model, player, "p1")
    player.fuel_stations = 1
    assert not model.is_node_salable_normally()
    assert not model.is_fuel_station_salable_normally()
    assert model.is_node_salable_for_debt_settlement(player)
    assert model.is_fuel_station_salable_for_debt_settlement(player)

    player.current_node = model.get_start_node()
    assert model.is_node_salable_normally()
    assert model.is_fuel_station_salable_normally()


def test_fuel_critical(make_model) -> None:
    model = make_model("p1", fuel=0)
    player = model.get_current_player()
    assert model.is_fuel_critical()
    assert not model.is_fuel_critical(player, model.get_start_node())
    player.fuel = model.get_minimum_fuel()
    assert not model.is_fuel_critical()


# ── Listings ──────────────────────────────────────────────────────────────────

def test_owned_and_unowned_listings(make_model, assign) -> None:
    model = make_model("p1", "p2")
    first, second = model.get_players()
    assign(model, first, "p1")
    model.board.get_node("p2").owner = second
    model.fix_owned_nodes()

    unowned = model.get_unowned_nodes()
    assert len(unowned) == 12
    assert all(n.owner is None and n.price > 0 for n in unowned)
    assert [n.id for n in model.get_owned_nodes()] == ["p1", "p2"]
    assert [n.id for n in model.get_owned_nodes(exclude=first)] == ["p2"]


def test_results_are_read_only(make_model, assign) -> None:
    model = make_model("p1", "p2")
    player = model.get_current_player()
    player.fuel_stations = 1
    assign(model, player, "p1")
    results = [
        model.get_unowned_nodes(),
        model.get_owned_nodes(),
        model.get_tradeable_players(),
        model.get_fuel_station_placeable_nodes(),
        model.get_laser_targetable_players(),
        model.get_players(),
        model.get_nodes(),
    ]
    for result in results:
        assert isinstance(result, tuple)
        with pytest.raises(AttributeError):
            result.append(None)
    before = model.get_players()
    with pytest.raises(TypeError):
        before[0] = None
    assert model.get_players() == before


def test_queries_are_pure(make_model, assign) -> None:
    model = make_model("p1", "p3", "p4", fuel=3)
    assign(model, model.get_players()[1], "p3")
    queries = [
        model.get_total_worth,
        model.get_node_price,
        model.get_fuel_price,
        model.get_maximum_purchaseable_fuel,
        model.is_trade_allowed,
        model.is_node_purchaseable,
        model.is_fuel_purchaseable,
        model.is_fuel_station_purchaseable,
        model.is_fuel_station_placeable,
        model.is_fuel_station_salable_normally,
        model.is_node_salable_normally,
        model.is_fuel_critical,
        model.is_negligence_takeover_allowed,
        model.get_unowned_nodes,
        model.get_owned_nodes,
        model.get_laser_targetable_players,
    ]
    for query in queries:
        assert query() == query()


# ── Open-question switches ────────────────────────────────────────────────────

def test_stranded_purchase_switch(make_model) -> None:
    assert make_model("p1", fuel=0).is_node_purchaseable()
    assert not make_model("p1", fuel=0, purchase_allowed_when_stranded=False).is_node_purchaseable()


def test_negligence_cash_switch(make_model, assign) -> None:
    for strict in (False, True):
        model = make_model("p2", "p3", cash=50, fuel=0, negligence_allowed_without_cash=not strict)
        _, owner = model.get_players()
        assign(model, owner, "p2")
        assert model.is_negligence_takeover_allowed() is not strict


def test_negligence_stranded_switch(make_model, assign) -> None:
    model = make_model("p2", "p3", fuel=0, negligence_allowed_when_stranded=False)
    assign(model, model.get_players()[1], "p2")
    assert not model.is_negligence_takeover_allowed()
    model.get_current_player().fuel = 1
    assert model.is_negligence_takeover_allowed()


def test_unknown_player_number_fails_fast(make_model) -> None:
    model = make_model("p1")
    with pytest.raises(KeyError):
        model.get_player(42)


def test_bypass_switch(make_model) -> None:
    assert not make_model("p1").is_bypass_ever_allowed()
    assert make_model("p1", rule_set=RuleSet(bypass_allowed=True)).is_bypass_ever_allowed()


def test_owned_node_policy_means_owned_by_the_acting_player(make_model, assign) -> None:
    owned_only = TransactionAvailability.OWNED_NODE_ONLY
    rules = RuleSet(
        fuel_station_purchase_availability=owned_only,
        fuel_station_buyback_availability=owned_only,
        node_buyback_availability=owned_only,
    )
    model = make_model("p2", "p3", rule_set=rules)
    visitor, rival = model.get_players()
    visitor.fuel_stations = 1
    assign(model, visitor, "p5")
    assign(model, rival, "p2")

    assert not model.is_fuel_station_purchaseable()
    assert not model.is_fuel_station_salable_normally()
    assert not model.is_node_salable_normally()

    home = model.board.get_node("p5")
    assert model.is_fuel_station_purchaseable(visitor, home)
    assert model.is_fuel_station_salable_normally(visitor, home)
    assert model.is_node_salable_normally(visitor, home)


def test_ownership_debug_log_only_when_enabled(make_model, assign, caplog) -> None:
    model = make_model("p1")
    with caplog.at_level(logging.INFO, logger="game"):
        assign(model, model.get_current_player(), "p1")
    assert "Reconciled ownership" not in caplog.text
    with caplog.at_level(logging.DEBUG, logger="game"):
        model.fix_owned_nodes()
    assert "Reconciled ownership: {1: ['p1']}" in caplog.text
