# rules.py — RuleSet: the parameter table that pivots the engine between variants

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constants import DEFAULT_RULES

if TYPE_CHECKING:
    from models import Node, Player


class RuleKey(str, Enum):
    FUEL_STATION_PRICE = "FUEL_STATION_PRICE"
    MINIMUM_FUEL = "MINIMUM_FUEL"
    LOW_FUEL = "LOW_FUEL"
    MAXIMUM_FUEL = "MAXIMUM_FUEL"
    FUEL_AVAILABLE_ON_UNOWNED_NODE = "FUEL_AVAILABLE_ON_UNOWNED_NODE"
    FUEL_STATION_PURCHASE_AVAILABILITY = "FUEL_STATION_PURCHASE_AVAILABILITY"
    FUEL_STATION_BUYBACK_AVAILABILITY = "FUEL_STATION_BUYBACK_AVAILABILITY"
    NODE_BUYBACK_AVAILABILITY = "NODE_BUYBACK_AVAILABILITY"
    CAN_PLACE_FUEL_STATIONS_ON_ANY_NODE = "CAN_PLACE_FUEL_STATIONS_ON_ANY_NODE"
    LASER_BATTLES_ALLOWED = "LASER_BATTLES_ALLOWED"
    LASERS_CAN_FIRE_FROM_START = "LASERS_CAN_FIRE_FROM_START"
    LASERS_CAN_FIRE_AT_START = "LASERS_CAN_FIRE_AT_START"
    LASER_BATTLE_FUEL_COST = "LASER_BATTLE_FUEL_COST"
    LASER_BATTLE_MAXIMUM_DISTANCE = "LASER_BATTLE_MAXIMUM_DISTANCE"
    BYPASS_ALLOWED = "BYPASS_ALLOWED"
    INITIAL_CASH = "INITIAL_CASH"
    INITIAL_FUEL = "INITIAL_FUEL"
    INITIAL_FUEL_STATIONS = "INITIAL_FUEL_STATIONS"
    FUEL_STATION_BANK = "FUEL_STATION_BANK"
    STATION_FUEL_PRICE_MULTIPLIER = "STATION_FUEL_PRICE_MULTIPLIER"


class TransactionAvailability(str, Enum):
    ALWAYS = "ALWAYS"
    NEVER = "NEVER"
    START_NODE_ONLY = "START_NODE_ONLY"
    OWNED_NODE_ONLY = "OWNED_NODE_ONLY"
    UNOWNED_NODE_ONLY = "UNOWNED_NODE_ONLY"


def is_transaction_available(
    policy: TransactionAvailability, node: "Node", player: Optional["Player"] = None
) -> bool:
    """
    Return whether *policy* permits a transaction while standing on *node*.

    ``OWNED_NODE_ONLY`` means owned by the acting *player*; without a player
    any owner qualifies.
    """
    policy = TransactionAvailability(policy)
    if policy == TransactionAvailability.ALWAYS:
        return True
    if policy == TransactionAvailability.NEVER:
        return False
    if policy == TransactionAvailability.START_NODE_ONLY:
        return node.is_start_node
    if policy == TransactionAvailability.OWNED_NODE_ONLY:
        if player is None:
            return node.owner is not None
        return node.owner is player
    return node.owner is None


class RuleSet(BaseModel):
    """
    Keyed rule configuration.

    Fields are the lower-case rule names; the upper-case ``RuleKey`` spelling is
    accepted as an alias so rule files can be written with either.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=str.upper,
        populate_by_name=True,
    )

    fuel_station_price: int = Field(default=DEFAULT_RULES["FUEL_STATION_PRICE"], ge=0)
    minimum_fuel: int = Field(default=DEFAULT_RULES["MINIMUM_FUEL"], ge=0)
    low_fuel: int = Field(default=DEFAULT_RULES["LOW_FUEL"], ge=0)
    maximum_fuel: int = Field(default=DEFAULT_RULES["MAXIMUM_FUEL"], ge=1)
    fuel_available_on_unowned_node: TransactionAvailability = TransactionAvailability(
        DEFAULT_RULES["FUEL_AVAILABLE_ON_UNOWNED_NODE"]
    )
    fuel_station_purchase_availability: TransactionAvailability = TransactionAvailability(
        DEFAULT_RULES["FUEL_STATION_PURCHASE_AVAILABILITY"]
    )
    fuel_station_buyback_availability: TransactionAvailability = TransactionAvailability(
        DEFAULT_RULES["FUEL_STATION_BUYBACK_AVAILABILITY"]
    )
    node_buyback_availability: TransactionAvailability = TransactionAvailability(
        DEFAULT_RULES["NODE_BUYBACK_AVAILABILITY"]
    )
    can_place_fuel_stations_on_any_node: bool = DEFAULT_RULES["CAN_PLACE_FUEL_STATIONS_ON_ANY_NODE"]
    laser_battles_allowed: bool = DEFAULT_RULES["LASER_BATTLES_ALLOWED"]
    lasers_can_fire_from_start: bool = DEFAULT_RULES["LASERS_CAN_FIRE_FROM_START"]
    lasers_can_fire_at_start: bool = DEFAULT_RULES["LASERS_CAN_FIRE_AT_START"]
    laser_battle_fuel_cost: int = Field(default=DEFAULT_RULES["LASER_BATTLE_FUEL_COST"], ge=0)
    laser_battle_maximum_distance: int = Field(default=DEFAULT_RULES["LASER_BATTLE_MAXIMUM_DISTANCE"], ge=0)
    bypass_allowed: bool = DEFAULT_RULES["BYPASS_ALLOWED"]
    initial_cash: int = Field(default=DEFAULT_RULES["INITIAL_CASH"], ge=0)
    initial_fuel: int = Field(default=DEFAULT_RULES["INITIAL_FUEL"], ge=0)
    initial_fuel_stations: int = Field(default=DEFAULT_RULES["INITIAL_FUEL_STATIONS"], ge=0)
    fuel_station_bank: int = Field(default=DEFAULT_RULES["FUEL_STATION_BANK"], ge=0)
    station_fuel_price_multiplier: int = Field(default=DEFAULT_RULES["STATION_FUEL_PRICE_MULTIPLIER"], ge=0)

    @model_validator(mode="after")
    def fuel_thresholds_are_ordered(self) -> "RuleSet":
        if not self.minimum_fuel <= self.low_fuel <= self.maximum_fuel:
            raise ValueError("MINIMUM_FUEL <= LOW_FUEL <= MAXIMUM_FUEL must hold")
        if self.initial_fuel > self.maximum_fuel:
            raise ValueError("INITIAL_FUEL cannot exceed MAXIMUM_FUEL")
        return self

    def get_value(self, key: Union[RuleKey, str]) -> Any:
        try:
            name = RuleKey(key).value.lower()
        except ValueError:
            raise KeyError(f"Unknown rule {key!r}") from None
        return getattr(self, name)

    __getitem__ = get_value

    def with_values(self, **overrides: Any) -> "RuleSet":
        """Return a copy with *overrides* (field names or rule keys) applied and validated."""
        data = self.model_dump()
        for key, value in overrides.items():
            data[key.lower()] = value
        return RuleSet.model_validate(data)

    is_transaction_available = staticmethod(is_transaction_available)


def load_rule_set(path: Union[str, Path], overrides: Optional[Dict[str, Any]] = None) -> RuleSet:
    """
    Read a JSON rule file. Keys left out keep their defaults.

    *overrides* win over the file; both may use field names or rule keys.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    data = {key.upper(): value for key, value in data.items()}
    if overrides:
        data.update({key.upper(): value for key, value in overrides.items()})
    return RuleSet.model_validate(data)
