# game.py — GameModel: the rules engine. Answers legality and price queries, never mutates.

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from board import Board, build_default_board
from models import Node, Player
from rules import RuleSet, is_transaction_available
from solarquest_models import GameConfig, PlayerConfig
from variants import TurnControl, TurnState, VariantKind

logger = logging.getLogger(__name__)


class GameModel:
    """
    Stateless rules layer over a board, a rule set and a roster.

    Every query taking ``player``/``node`` may be called without them, in
    which case the current player and the node that player stands on are
    used. Passing them explicitly asks a hypothetical question without
    touching turn state.

    The three ``*_allowed_*`` flags cover points where the reference rules
    are debatable; the defaults keep the reference behaviour.
    """

    def __init__(
        self,
        board: Board,
        rule_set: RuleSet,
        players: Iterable[Player],
        fuel_stations_remaining: int = 0,
        control: Optional[TurnControl] = None,
        *,
        purchase_allowed_when_stranded: bool = True,
        negligence_allowed_without_cash: bool = True,
        negligence_allowed_when_stranded: bool = True,
    ):
        if fuel_stations_remaining < 0:
            raise ValueError("fuel_stations_remaining cannot be negative")
        self.board = board
        self.rule_set = rule_set
        self.players: List[Player] = []
        self.player_map: Dict[int, Player] = {}
        self.set_players(players)
        self.fuel_stations_remaining = fuel_stations_remaining
        if control is None and self.players:
            control = TurnControl.local(TurnState(current_player=self.players[0].number))
        self.control = control
        self.purchase_allowed_when_stranded = purchase_allowed_when_stranded
        self.negligence_allowed_without_cash = negligence_allowed_without_cash
        self.negligence_allowed_when_stranded = negligence_allowed_when_stranded

    # ── Setup ─────────────────────────────────────────────────────────────────

    def set_board(self, board: Board) -> None:
        self.board = board

    def set_rule_set(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set

    def set_players(self, players: Iterable[Player]) -> None:
        self.players = list(players)
        self.player_map = {}
        for player in self.players:
            if player.number in self.player_map:
                raise ValueError(f"Duplicate player number {player.number}")
            self.player_map[player.number] = player

    def fix_owned_nodes(self) -> None:
        """Rebuild every player's owned nodes and group counts from node ownership."""
        for player in self.players:
            player.owned_nodes.clear()
        for node in self.board.nodes:
            owner = node.owner
            if owner is None:
                continue
            if self.player_map.get(owner.number) is not owner:
                raise ValueError(f"Node {node.id} is owned by a player outside the roster")
            owner.add_node(node)
        for player in self.players:
            player.fix_group_counts()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Reconciled ownership: %s",
                {p.number: sorted(p.owned_nodes) for p in self.players},
            )

    # ── Roster and board ──────────────────────────────────────────────────────

    def get_current_player(self) -> Player:
        if self.control is None:
            raise RuntimeError("No turn control installed")
        return self.control.current_player(self)

    def get_player(self, number: int) -> Player:
        try:
            return self.player_map[number]
        except KeyError:
            raise KeyError(f"Unknown player number {number}") from None

    def get_players(self) -> Tuple[Player, ...]:
        return tuple(self.players)

    def get_nodes(self) -> Tuple[Node, ...]:
        return self.board.nodes

    def get_start_node(self) -> Node:
        return self.board.start_node

    def get_unowned_nodes(self) -> Tuple[Node, ...]:
        return tuple(node for node in self.board.nodes if node.is_purchaseable)

    def get_owned_nodes(self, exclude: Optional[Player] = None) -> Tuple[Node, ...]:
        return tuple(
            node for node in self.board.nodes
            if node.owner is not None and node.owner is not exclude
        )

    def get_tradeable_players(self, exclude: Optional[Player] = None) -> Tuple[Player, ...]:
        return tuple(p for p in self.players if self.is_trade_allowed(p) and p is not exclude)

    def _resolve(self, player: Optional[Player], node: Optional[Node] = None) -> Tuple[Player, Node]:
        if player is None:
            player = self.get_current_player()
        if node is None:
            node = player.current_node
        if node is None:
            raise RuntimeError(f"Player {player.number} has no current node")
        return player, node

    # ── Rule lookups ──────────────────────────────────────────────────────────

    def get_fuel_stations_remaining(self) -> int:
        return self.fuel_stations_remaining

    def has_unpurchased_fuel_station(self) -> bool:
        return self.fuel_stations_remaining > 0

    def get_fuel_station_price(self) -> int:
        return self.rule_set.fuel_station_price

    def get_minimum_fuel(self) -> int:
        return self.rule_set.minimum_fuel

    def get_low_fuel(self) -> int:
        return self.rule_set.low_fuel

    def get_maximum_fuel(self) -> int:
        return self.rule_set.maximum_fuel

    def is_laser_battle_ever_allowed(self) -> bool:
        return self.rule_set.laser_battles_allowed

    def is_bypass_ever_allowed(self) -> bool:
        return self.rule_set.bypass_allowed

    # ── Totals and prices ─────────────────────────────────────────────────────

    def get_total_worth(self, player: Optional[Player] = None) -> int:
        if player is None:
            player = self.get_current_player()
        worth = player.cash + self.get_fuel_station_price() * player.fuel_stations
        return worth + sum(self.get_node_price(node) for node in player.owned_nodes.values())

    def get_node_price(self, node: Optional[Node] = None) -> int:
        if node is None:
            _, node = self._resolve(None)
        if node.has_fuel_station:
            return node.price + self.get_fuel_station_price()
        return node.price

    def get_fuel_price(self, player: Optional[Player] = None, node: Optional[Node] = None) -> int:
        player, node = self._resolve(player, node)
        return node.get_fuel_price(self.rule_set, player)

    def get_maximum_purchaseable_fuel(self, player: Optional[Player] = None, node: Optional[Node] = None) -> int:
        player, node = self._resolve(player, node)
        space_in_tank = self.get_maximum_fuel() - player.fuel
        fuel_price = node.get_fuel_price(self.rule_set, player)
        affordable = self.get_maximum_fuel() if fuel_price == 0 else player.cash // fuel_price
        return min(space_in_tank, affordable)

    def get_laser_battle_fuel_cost(self, target: Node, player: Optional[Player] = None) -> int:
        player, origin = self._resolve(player)
        distance = self.board.distance_between_nodes(origin, target)
        return (distance + 1) * self.rule_set.laser_battle_fuel_cost

    # ── Legality predicates ───────────────────────────────────────────────────

    def is_trade_allowed(self, player: Optional[Player] = None) -> bool:
        if player is None:
            player = self.get_current_player()
        return bool(player.owned_nodes) or player.cash > 0

    def is_fuel_critical(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        return player.fuel < self.get_minimum_fuel() and node.uses_fuel

    def is_node_purchaseable(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        if not self.purchase_allowed_when_stranded and self.is_fuel_critical(player, node):
            return False
        return node.is_purchaseable and player.cash >= self.get_node_price(node)

    def is_fuel_purchaseable(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        return (
            node.has_fuel(self.rule_set.fuel_available_on_unowned_node, player)
            and player.cash >= node.get_fuel_price(self.rule_set, player)
            and player.fuel < self.get_maximum_fuel()
        )

    def is_fuel_station_purchaseable(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        return (
            is_transaction_available(self.rule_set.fuel_station_purchase_availability, node, player)
            and self.has_unpurchased_fuel_station()
            and player.cash >= self.get_fuel_station_price()
        )

    def get_fuel_station_placeable_nodes(self, player: Optional[Player] = None) -> Tuple[Node, ...]:
        player, current = self._resolve(player)
        any_node = self.rule_set.can_place_fuel_stations_on_any_node
        return tuple(
            node for node in self.board.nodes
            if player.owns(node)
            and not node.has_fuel_station
            and node.can_have_fuel_station
            and (any_node or node is current)
        )

    def is_fuel_station_placeable(self, player: Optional[Player] = None) -> bool:
        if player is None:
            player = self.get_current_player()
        if player.fuel_stations <= 0:
            return False
        return bool(self.get_fuel_station_placeable_nodes(player))

    def is_fuel_station_salable_normally(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        return (
            self.is_fuel_station_salable_for_debt_settlement(player)
            and is_transaction_available(self.rule_set.fuel_station_buyback_availability, node, player)
        )

    def is_fuel_station_salable_for_debt_settlement(self, player: Optional[Player] = None) -> bool:
        if player is None:
            player = self.get_current_player()
        return player.fuel_stations > 0

    def is_node_salable_normally(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        player, node = self._resolve(player, node)
        return (
            self.is_node_salable_for_debt_settlement(player)
            and is_transaction_available(self.rule_set.node_buyback_availability, node, player)
        )

    def is_node_salable_for_debt_settlement(self, player: Optional[Player] = None) -> bool:
        if player is None:
            player = self.get_current_player()
        return bool(player.owned_nodes)

    def is_negligence_takeover_allowed(self, player: Optional[Player] = None, node: Optional[Node] = None) -> bool:
        """
        An owner who left a station-capable node without a fuel station can be
        bought out by a low-fuel visitor.
        """
        player, node = self._resolve(player, node)
        if not self.negligence_allowed_when_stranded and self.is_fuel_critical(player, node):
            return False
        can_pay = player.cash >= node.price
        if self.negligence_allowed_without_cash:
            # Trading may still raise the money before the takeover completes.
            can_pay = can_pay or self.is_trade_allowed(player)
        return (
            node.owner is not None
            and node.can_have_fuel_station
            and not node.has_fuel_station
            and player.fuel <= self.get_low_fuel()
            and player is not node.owner
            and can_pay
        )

    # ── Laser battles ─────────────────────────────────────────────────────────

    def is_laser_battle_allowed(self, player: Optional[Player] = None) -> bool:
        if player is None:
            player = self.get_current_player()
        if self.control is None:
            raise RuntimeError("No turn control installed")
        return self.control.laser_battle_allowed(self, player)

    def get_laser_maximum_distance(self, player: Optional[Player] = None) -> float:
        """Farthest a *player* can shoot with the fuel on board; negative means no shot at all."""
        if player is None:
            player = self.get_current_player()
        cost = self.rule_set.laser_battle_fuel_cost
        maximum = math.inf if cost == 0 else player.fuel // cost - 1
        return min(maximum, self.rule_set.laser_battle_maximum_distance)

    def get_laser_targetable_players(self, player: Optional[Player] = None) -> Tuple[Player, ...]:
        shooter, origin = self._resolve(player)
        if origin.is_start_node and not self.rule_set.lasers_can_fire_from_start:
            return ()

        maximum_distance = self.get_laser_maximum_distance(shooter)
        if maximum_distance < 0:
            return ()

        targets: List[Player] = []
        for other in self.players:
            if other is shooter or other.is_game_over:
                continue
            if other.current_node.is_start_node and not self.rule_set.lasers_can_fire_at_start:
                continue
            target_node = other.current_node
            if not self.board.is_reachable(origin, target_node):
                continue
            if self.board.distance_between_nodes(origin, target_node) <= maximum_distance:
                targets.append(other)
        return tuple(targets)


def new_game(
    players: Iterable[str],
    board: Optional[Board] = None,
    rule_set: Optional[RuleSet] = None,
    kind: VariantKind = VariantKind.LOCAL,
    **engine_options: bool,
) -> GameModel:
    """Seat the named players on the start node with the rule set's opening stakes."""
    config = GameConfig(players=[PlayerConfig(name=name) for name in players])
    board = board or build_default_board()
    rule_set = rule_set or RuleSet()
    start = board.start_node
    roster = [
        Player(
            number=idx,
            name=p.name,
            cash=rule_set.initial_cash,
            fuel=rule_set.initial_fuel,
            fuel_stations=rule_set.initial_fuel_stations,
            current_node=start,
        )
        for idx, p in enumerate(config.players, start=1)
    ]
    bank = rule_set.fuel_station_bank - rule_set.initial_fuel_stations * len(roster)
    if bank < 0:
        raise ValueError("FUEL_STATION_BANK cannot cover the initial fuel stations")
    turn = TurnState(current_player=roster[0].number)
    control = TurnControl(kind, turn)
    model = GameModel(board, rule_set, roster, bank, control, **engine_options)
    logger.debug("New game: %s on %s", [p.name for p in roster], start.id)
    return model
