# actions.py — Sequencer transitions. Each one consults the rules engine before mutating.

from __future__ import annotations

import logging
from typing import Optional

from game import GameModel
from models import Node, Player
from variants import PHASE_ORDER, TurnPhase, TurnState

logger = logging.getLogger(__name__)


class IllegalActionError(RuntimeError):
    """Raised when a sequencer applies an action the rules engine does not allow."""


def _acting(model: GameModel, player: Optional[Player]) -> Player:
    return model.get_current_player() if player is None else player


def _require(allowed: bool, message: str) -> None:
    if not allowed:
        raise IllegalActionError(message)


def _transfer(node: Node, new_owner: Optional[Player]) -> None:
    if node.owner is not None:
        node.owner.remove_node(node)
    node.owner = new_owner
    if new_owner is not None:
        new_owner.add_node(node)


# ── Purchases ─────────────────────────────────────────────────────────────────

def purchase_node(model: GameModel, player: Optional[Player] = None) -> Node:
    player = _acting(model, player)
    node = player.current_node
    _require(model.is_node_purchaseable(player, node), f"{player} cannot purchase {node}.")
    price = model.get_node_price(node)
    player.cash -= price
    _transfer(node, player)
    logger.info("%s purchased %s for %d.", player, node, price)
    return node


def purchase_fuel(model: GameModel, amount: int, player: Optional[Player] = None) -> int:
    """Buy *amount* units at the current node and pay the owner, if any. Returns the total cost."""
    player = _acting(model, player)
    node = player.current_node
    _require(amount > 0, "Fuel amount must be positive.")
    _require(model.is_fuel_purchaseable(player, node), f"{player} cannot buy fuel at {node}.")
    _require(
        amount <= model.get_maximum_purchaseable_fuel(player, node),
        f"{player} cannot buy {amount} fuel at {node}.",
    )
    cost = amount * model.get_fuel_price(player, node)
    player.cash -= cost
    player.fuel += amount
    if node.owner is not None and node.owner is not player:
        node.owner.cash += cost
    logger.info("%s bought %d fuel at %s for %d.", player, amount, node, cost)
    return cost


def purchase_fuel_station(model: GameModel, player: Optional[Player] = None) -> None:
    player = _acting(model, player)
    _require(
        model.is_fuel_station_purchaseable(player, player.current_node),
        f"{player} cannot purchase a fuel station.",
    )
    player.cash -= model.get_fuel_station_price()
    player.fuel_stations += 1
    model.fuel_stations_remaining -= 1
    logger.info("%s purchased a fuel station (%d left in bank).", player, model.fuel_stations_remaining)


def place_fuel_station(model: GameModel, node: Node, player: Optional[Player] = None) -> None:
    player = _acting(model, player)
    _require(model.is_fuel_station_placeable(player), f"{player} has nowhere to place a fuel station.")
    _require(
        node in model.get_fuel_station_placeable_nodes(player),
        f"{player} cannot place a fuel station on {node}.",
    )
    player.fuel_stations -= 1
    node.has_fuel_station = True
    logger.info("%s placed a fuel station on %s.", player, node)


# ── Sales back to the bank ────────────────────────────────────────────────────

def sell_fuel_station(model: GameModel, player: Optional[Player] = None, debt_settlement: bool = False) -> int:
    player = _acting(model, player)
    if debt_settlement:
        allowed = model.is_fuel_station_salable_for_debt_settlement(player)
    else:
        allowed = model.is_fuel_station_salable_normally(player, player.current_node)
    _require(allowed, f"{player} cannot sell a fuel station.")
    price = model.get_fuel_station_price()
    player.fuel_stations -= 1
    player.cash += price
    model.fuel_stations_remaining += 1
    logger.info("%s sold a fuel station back for %d.", player, price)
    return price


def sell_node(model: GameModel, node: Node, player: Optional[Player] = None, debt_settlement: bool = False) -> int:
    """Sell *node* back to the bank. A fuel station on it goes back with it."""
    player = _acting(model, player)
    if debt_settlement:
        allowed = model.is_node_salable_for_debt_settlement(player)
    else:
        allowed = model.is_node_salable_normally(player, player.current_node)
    _require(allowed, f"{player} cannot sell nodes.")
    _require(player.owns(node), f"{player} does not own {node}.")
    price = model.get_node_price(node)
    if node.has_fuel_station:
        node.has_fuel_station = False
        model.fuel_stations_remaining += 1
    _transfer(node, None)
    player.cash += price
    logger.info("%s sold %s back for %d.", player, node, price)
    return price


def negligence_takeover(model: GameModel, player: Optional[Player] = None) -> Node:
    """Force the sale of the current node from its negligent owner at face price."""
    player = _acting(model, player)
    node = player.current_node
    _require(
        model.is_negligence_takeover_allowed(player, node),
        f"{player} cannot take over {node}.",
    )
    _require(player.cash >= node.price, f"{player} must raise {node.price} before taking over {node}.")
    previous = node.owner
    player.cash -= node.price
    previous.cash += node.price
    _transfer(node, player)
    logger.info("%s took over %s from %s for %d.", player, node, previous, node.price)
    return node


# ── Lasers ────────────────────────────────────────────────────────────────────

def fire_laser(model: GameModel, target: Player, player: Optional[Player] = None) -> int:
    """Pay the fuel for a shot at *target*. Resolving hits is left to the caller."""
    player = _acting(model, player)
    _require(model.is_laser_battle_allowed(player), f"{player} cannot fire lasers now.")
    _require(target in model.get_laser_targetable_players(player), f"{player} cannot target {target}.")
    cost = model.get_laser_battle_fuel_cost(target.current_node, player)
    player.fuel -= cost
    logger.info("%s fired on %s for %d fuel.", player, target, cost)
    return cost


# ── Turn flow ─────────────────────────────────────────────────────────────────

def advance_phase(turn: TurnState) -> TurnPhase:
    idx = PHASE_ORDER.index(turn.phase)
    if idx + 1 >= len(PHASE_ORDER):
        raise IllegalActionError("Turn already ended; call end_turn.")
    turn.phase = PHASE_ORDER[idx + 1]
    return turn.phase


def end_turn(model: GameModel, turn: TurnState) -> Player:
    """Hand the turn to the next player still in the game."""
    players = model.get_players()
    if all(p.is_game_over for p in players):
        raise IllegalActionError("Every player is out of the game.")
    idx = players.index(model.get_player(turn.current_player))
    for step in range(1, len(players) + 1):
        candidate = players[(idx + step) % len(players)]
        if not candidate.is_game_over:
            break
    turn.current_player = candidate.number
    turn.phase = TurnPhase.ROLL
    logger.info("Turn passes to %s.", candidate)
    return candidate
