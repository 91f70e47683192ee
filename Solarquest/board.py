# board.py — Board construction and shortest-path distances

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from constants import DEFAULT_BOARD
from models import Node
from solarquest_models import BoardConfig
from utils import bfs_distances

logger = logging.getLogger(__name__)


class BoardError(ValueError):
    """Raised when a board query references a node the board cannot resolve."""


class Board:
    def __init__(self, nodes: Iterable[Node], edges: Iterable[Tuple[str, str]], directed: bool = False):
        self._nodes: Dict[str, Node] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise BoardError(f"Duplicate node id '{node.id}'.")
            self._nodes[node.id] = node
        starts = [n for n in self._nodes.values() if n.is_start_node]
        if len(starts) != 1:
            raise BoardError(f"Board needs exactly one start node, found {len(starts)}.")
        self._start = starts[0]
        self.directed = directed

        self._adjacency: Dict[str, List[str]] = {nid: [] for nid in self._nodes}
        for a, b in edges:
            for nid in (a, b):
                if nid not in self._nodes:
                    raise BoardError(f"Edge {a}-{b} references unknown node '{nid}'.")
            if b not in self._adjacency[a]:
                self._adjacency[a].append(b)
            if not directed and a not in self._adjacency[b]:
                self._adjacency[b].append(a)
        self._distance_cache: Dict[str, Dict[str, int]] = {}

    # ── Graph helpers ─────────────────────────────────────────────────────────

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    @property
    def start_node(self) -> Node:
        return self._start

    def get_node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise BoardError(f"Unknown node '{node_id}'.") from None

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and self._nodes.get(node.id) is node

    def __iter__(self):
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def neighbors(self, node: Node) -> Tuple[Node, ...]:
        self._check(node)
        return tuple(self._nodes[nid] for nid in self._adjacency[node.id])

    def is_reachable(self, a: Node, b: Node) -> bool:
        self._check(b)
        return b.id in self._distances_from(a)

    def distance_between_nodes(self, a: Node, b: Node) -> int:
        self._check(b)
        distances = self._distances_from(a)
        if b.id not in distances:
            raise BoardError(f"No path from '{a.id}' to '{b.id}'.")
        return distances[b.id]

    def _distances_from(self, node: Node) -> Dict[str, int]:
        self._check(node)
        distances = self._distance_cache.get(node.id)
        if distances is None:
            distances = bfs_distances(self._adjacency, node.id)
            self._distance_cache[node.id] = distances
        return distances

    def _check(self, node: Node) -> None:
        if node not in self:
            raise BoardError(f"Node '{getattr(node, 'id', node)}' is not on this board.")


def build_board(config: BoardConfig) -> Board:
    nodes = [Node(**node.model_dump()) for node in config.nodes]
    board = Board(nodes, config.edges, directed=config.directed)
    logger.debug("Built board with %d nodes, start at %s", len(board), board.start_node.id)
    return board


def load_board(path: Union[str, Path]) -> Board:
    """Read a JSON board definition and build it."""
    return build_board(BoardConfig.model_validate_json(Path(path).read_text(encoding="utf-8")))


def build_default_board(config: Optional[dict] = None) -> Board:
    return build_board(BoardConfig.model_validate(config or DEFAULT_BOARD))
