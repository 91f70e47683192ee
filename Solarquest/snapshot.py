# snapshot.py — Save the forward ownership relation; rebuild the inverse on load

from __future__ import annotations

import logging
from typing import Optional

from board import Board
from game import GameModel
from models import Player
from rules import RuleSet
from solarquest_models import GameSnapshot, NodeState, PlayerState
from variants import TurnControl, TurnState, VariantKind

logger = logging.getLogger(__name__)


def take_snapshot(model: GameModel, turn: Optional[TurnState] = None) -> GameSnapshot:
    if turn is None:
        turn = model.control.turn
    return GameSnapshot(
        players=[
            PlayerState(
                number=p.number,
                name=p.name,
                cash=p.cash,
                fuel=p.fuel,
                fuel_stations=p.fuel_stations,
                current_node=p.current_node.id,
                is_game_over=p.is_game_over,
            )
            for p in model.players
        ],
        nodes=[
            NodeState(
                id=node.id,
                owner=None if node.owner is None else node.owner.number,
                has_fuel_station=node.has_fuel_station,
            )
            for node in model.board.nodes
            if node.owner is not None or node.has_fuel_station
        ],
        fuel_stations_remaining=model.fuel_stations_remaining,
        current_player=turn.current_player,
        phase=turn.phase,
    )


def restore_snapshot(
    snapshot: GameSnapshot,
    board: Board,
    rule_set: RuleSet,
    kind: VariantKind = VariantKind.LOCAL,
    **engine_options: bool,
) -> GameModel:
    """
    Rebuild a model from *snapshot* on a freshly built *board*.

    Node ownership is re-pointed from the stored owner numbers, then
    ``fix_owned_nodes`` derives each player's owned nodes and group counts.
    """
    players = [
        Player(
            number=state.number,
            name=state.name,
            cash=state.cash,
            fuel=state.fuel,
            fuel_stations=state.fuel_stations,
            current_node=board.get_node(state.current_node),
            is_game_over=state.is_game_over,
        )
        for state in snapshot.players
    ]
    by_number = {p.number: p for p in players}

    for node in board.nodes:
        node.owner = None
        node.has_fuel_station = False
    for state in snapshot.nodes:
        node = board.get_node(state.id)
        node.owner = None if state.owner is None else by_number[state.owner]
        node.has_fuel_station = state.has_fuel_station

    turn = TurnState(current_player=snapshot.current_player, phase=snapshot.phase)
    model = GameModel(
        board,
        rule_set,
        players,
        snapshot.fuel_stations_remaining,
        TurnControl(kind, turn),
        **engine_options,
    )
    model.fix_owned_nodes()
    logger.debug("Restored game with %d players, %d owned nodes", len(players), len(snapshot.nodes))
    return model
