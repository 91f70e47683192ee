# models.py — Dataclasses for Solarquest game entities

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from rules import TransactionAvailability, is_transaction_available
from utils import tally_groups

if TYPE_CHECKING:
    from rules import RuleSet


@dataclass(eq=False)
class Node:
    id: str
    name: str = ""
    price: int = 0
    group: Optional[str] = None
    fuel_prices: List[int] = field(default_factory=list)
    can_have_fuel_station: bool = False
    is_start_node: bool = False
    uses_fuel: bool = True
    owner: Optional[Player] = field(default=None, repr=False)
    has_fuel_station: bool = False

    @property
    def is_purchaseable(self) -> bool:
        return self.price > 0 and self.owner is None

    def has_fuel(self, availability: TransactionAvailability, player: Optional[Player] = None) -> bool:
        """Whether fuel may be sold here under the unowned-node *availability* policy."""
        if not self.fuel_prices:
            return False
        if self.has_fuel_station:
            return True
        if self.owner is None:
            return is_transaction_available(availability, self, player)
        return False

    def get_fuel_price(self, rule_set: RuleSet, player: Player) -> int:
        """
        Per-unit fuel price *player* pays here.

        Owners fuel for free. Otherwise the price comes from ``fuel_prices``
        indexed by how many nodes of this group the owner holds, scaled by the
        station multiplier when a fuel station stands on the node.
        """
        if not self.fuel_prices or self.owner is player:
            return 0
        if self.owner is None:
            return self.fuel_prices[0]
        count = max(1, self.owner.group_count(self.group))
        price = self.fuel_prices[min(count, len(self.fuel_prices)) - 1]
        if self.has_fuel_station:
            price *= rule_set.station_fuel_price_multiplier
        return price

    def __str__(self) -> str:
        return self.name or self.id


@dataclass(eq=False)
class Player:
    number: int
    name: str
    cash: int = 0
    fuel: int = 0
    fuel_stations: int = 0
    current_node: Optional[Node] = None
    is_game_over: bool = False
    owned_nodes: Dict[str, Node] = field(default_factory=dict, repr=False)
    group_counts: Dict[str, int] = field(default_factory=dict)

    def owns(self, node: Node) -> bool:
        return self.owned_nodes.get(node.id) is node

    def group_count(self, group: Optional[str]) -> int:
        if group is None:
            return 0
        return self.group_counts.get(group, 0)

    def add_node(self, node: Node) -> None:
        if node.id in self.owned_nodes:
            return
        self.owned_nodes[node.id] = node
        if node.group is not None:
            self.group_counts[node.group] = self.group_counts.get(node.group, 0) + 1

    def remove_node(self, node: Node) -> None:
        if self.owned_nodes.pop(node.id, None) is None:
            return
        if node.group is not None:
            remaining = self.group_counts.get(node.group, 0) - 1
            if remaining > 0:
                self.group_counts[node.group] = remaining
            else:
                self.group_counts.pop(node.group, None)

    def fix_group_counts(self) -> None:
        self.group_counts = tally_groups(node.group for node in self.owned_nodes.values())

    def __str__(self) -> str:
        return self.name
