# variants.py — Turn state and the capability the rules engine asks about turns

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game import GameModel
    from models import Player


class TurnPhase(str, Enum):
    ROLL = "ROLL"
    MOVE = "MOVE"
    LAND = "LAND"
    TRANSACT = "TRANSACT"
    END = "END"


PHASE_ORDER = list(TurnPhase)


@dataclass
class TurnState:
    """Sequencer-owned turn bookkeeping. The engine only reads it."""

    current_player: int
    phase: TurnPhase = TurnPhase.ROLL


class VariantKind(str, Enum):
    LOCAL = "LOCAL"    # hot-seat / client side: answers for UI buttons
    SERVER = "SERVER"  # authoritative: also enforces the turn phase


@dataclass(frozen=True)
class TurnControl:
    """
    Answers the two turn-dependent questions the engine cannot answer from the
    board alone: who is acting, and may that player fire a laser right now.

    Variants are picked by ``kind`` rather than by subclassing the engine.
    """

    kind: VariantKind
    turn: TurnState

    @staticmethod
    def local(turn: TurnState) -> "TurnControl":
        return TurnControl(VariantKind.LOCAL, turn)

    @staticmethod
    def server(turn: TurnState) -> "TurnControl":
        return TurnControl(VariantKind.SERVER, turn)

    def current_player(self, model: GameModel) -> Player:
        return model.get_player(self.turn.current_player)

    def laser_battle_allowed(self, model: GameModel, player: Player) -> bool:
        if not model.is_laser_battle_ever_allowed() or player.is_game_over:
            return False
        if player.number != self.turn.current_player:
            return False
        if self.kind == VariantKind.SERVER and self.turn.phase != TurnPhase.TRANSACT:
            return False
        return bool(model.get_laser_targetable_players(player))
