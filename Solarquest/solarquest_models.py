"""Strict pydantic models for Solarquest settings, board definitions and snapshots."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from constants import MAX_PLAYERS, MIN_PLAYERS
from variants import TurnPhase


class PlayerConfig(BaseModel):
    name: str = Field(min_length=1, max_length=32)


class GameConfig(BaseModel):
    players: List[PlayerConfig] = Field(min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)

    @field_validator("players")
    @classmethod
    def player_names_are_unique(cls, players: List[PlayerConfig]) -> List[PlayerConfig]:
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique")
        return players


class NodeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str = ""
    price: int = Field(default=0, ge=0)
    group: Optional[str] = None
    fuel_prices: List[int] = Field(default_factory=list)
    can_have_fuel_station: bool = False
    is_start_node: bool = False
    uses_fuel: bool = True

    @field_validator("fuel_prices")
    @classmethod
    def fuel_prices_are_non_negative(cls, prices: List[int]) -> List[int]:
        if any(price < 0 for price in prices):
            raise ValueError("Fuel prices cannot be negative")
        return prices


class BoardConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nodes: List[NodeConfig] = Field(min_length=1)
    edges: List[Tuple[str, str]] = Field(default_factory=list)
    directed: bool = False

    @model_validator(mode="after")
    def graph_is_well_formed(self) -> "BoardConfig":
        ids = [node.id for node in self.nodes]
        if len(set(ids)) != len(ids):
            raise ValueError("Node ids must be unique")
        starts = [node.id for node in self.nodes if node.is_start_node]
        if len(starts) != 1:
            raise ValueError(f"Board needs exactly one start node, found {len(starts)}")
        known = set(ids)
        for a, b in self.edges:
            if a not in known or b not in known:
                raise ValueError(f"Edge {a}-{b} references an unknown node")
        return self


# ── Snapshots ─────────────────────────────────────────────────────────────────
# Only the forward relation is stored: a node names its owner by number.
# Player.owned_nodes is derived and rebuilt on restore.

class NodeState(BaseModel):
    id: str
    owner: Optional[int] = None
    has_fuel_station: bool = False


class PlayerState(BaseModel):
    number: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=32)
    cash: int = Field(ge=0)
    fuel: int = Field(ge=0)
    fuel_stations: int = Field(default=0, ge=0)
    current_node: str
    is_game_over: bool = False


class GameSnapshot(BaseModel):
    players: List[PlayerState] = Field(min_length=1)
    nodes: List[NodeState]
    fuel_stations_remaining: int = Field(ge=0)
    current_player: int
    phase: TurnPhase = TurnPhase.ROLL

    @model_validator(mode="after")
    def references_are_consistent(self) -> "GameSnapshot":
        numbers = {p.number for p in self.players}
        if len(numbers) != len(self.players):
            raise ValueError("Player numbers must be unique")
        if self.current_player not in numbers:
            raise ValueError(f"Unknown current player {self.current_player}")
        for node in self.nodes:
            if node.owner is not None and node.owner not in numbers:
                raise ValueError(f"Node {node.id} is owned by unknown player {node.owner}")
            if node.has_fuel_station and node.owner is None:
                raise ValueError(f"Unowned node {node.id} cannot carry a fuel station")
        return self
