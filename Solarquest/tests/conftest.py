from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from board import Board
from game import GameModel
from models import Node, Player
from rules import RuleSet


def chain_board(length: int = 14) -> Board:
    """start - p1 - p2 - ... - p<length>; distance(p_i, p_j) == |i - j|, groups pair up planets."""
    nodes = [Node(id="start", name="Start", is_start_node=True, uses_fuel=False)]
    for i in range(1, length + 1):
        nodes.append(
            Node(
                id=f"p{i}",
                name=f"Planet {i}",
                price=100,
                group=f"g{(i - 1) // 2}",
                fuel_prices=[5, 10],
                can_have_fuel_station=True,
            )
        )
    edges = [(nodes[i].id, nodes[i + 1].id) for i in range(length)]
    return Board(nodes, edges)


@pytest.fixture
def new_board():
    return chain_board


@pytest.fixture
def board() -> Board:
    return chain_board()


@pytest.fixture
def make_model(board):
    """Build a model with one player per position; the first player is current."""

    def factory(*positions: str, rule_set: RuleSet | None = None, cash: int = 1000, fuel: int = 10,
                stations_in_bank: int = 10, **options) -> GameModel:
        players = [
            Player(number=i, name=f"P{i}", cash=cash, fuel=fuel, current_node=board.get_node(pos))
            for i, pos in enumerate(positions, start=1)
        ]
        return GameModel(board, rule_set or RuleSet(), players, stations_in_bank, **options)

    return factory


def give(model: GameModel, player: Player, *node_ids: str) -> None:
    for node_id in node_ids:
        model.board.get_node(node_id).owner = player
    model.fix_owned_nodes()


@pytest.fixture
def assign():
    return give
