# constants.py — Static game data for Solarquest

MIN_PLAYERS = 2
MAX_PLAYERS = 6

DEFAULT_RULES = {
    "FUEL_STATION_PRICE": 200,
    "MINIMUM_FUEL": 1,
    "LOW_FUEL": 3,
    "MAXIMUM_FUEL": 30,
    "FUEL_AVAILABLE_ON_UNOWNED_NODE": "ALWAYS",
    "FUEL_STATION_PURCHASE_AVAILABILITY": "START_NODE_ONLY",
    "FUEL_STATION_BUYBACK_AVAILABILITY": "START_NODE_ONLY",
    "NODE_BUYBACK_AVAILABILITY": "START_NODE_ONLY",
    "CAN_PLACE_FUEL_STATIONS_ON_ANY_NODE": False,
    "LASER_BATTLES_ALLOWED": True,
    "LASERS_CAN_FIRE_FROM_START": False,
    "LASERS_CAN_FIRE_AT_START": False,
    "LASER_BATTLE_FUEL_COST": 1,
    "LASER_BATTLE_MAXIMUM_DISTANCE": 4,
    "BYPASS_ALLOWED": False,
    "INITIAL_CASH": 3000,
    "INITIAL_FUEL": 20,
    "INITIAL_FUEL_STATIONS": 0,
    "FUEL_STATION_BANK": 32,
    "STATION_FUEL_PRICE_MULTIPLIER": 1,
}

# Built-in board: the inner solar system. Deep-space nodes cost nothing and
# cannot be bought; planets and moons are grouped by the body they orbit.
DEFAULT_BOARD = {
    "directed": False,
    "nodes": [
        {"id": "earth", "name": "Earth", "is_start_node": True, "uses_fuel": False},
        {"id": "luna", "name": "Luna", "price": 120, "group": "earth",
         "fuel_prices": [4, 8], "can_have_fuel_station": True},
        {"id": "space_1", "name": "Deep Space 1"},
        {"id": "venus", "name": "Venus", "price": 240, "group": "inner",
         "fuel_prices": [6, 12], "can_have_fuel_station": True},
        {"id": "mercury", "name": "Mercury", "price": 200, "group": "inner",
         "fuel_prices": [5, 10], "can_have_fuel_station": True},
        {"id": "space_2", "name": "Deep Space 2"},
        {"id": "mars", "name": "Mars", "price": 300, "group": "mars",
         "fuel_prices": [8, 16, 24], "can_have_fuel_station": True},
        {"id": "phobos", "name": "Phobos", "price": 100, "group": "mars",
         "fuel_prices": [3, 6, 9], "can_have_fuel_station": True},
        {"id": "deimos", "name": "Deimos", "price": 100, "group": "mars",
         "fuel_prices": [3, 6, 9], "can_have_fuel_station": True},
        {"id": "space_3", "name": "Deep Space 3"},
        {"id": "ceres", "name": "Ceres", "price": 160, "group": "belt",
         "fuel_prices": [5]},
        {"id": "space_4", "name": "Deep Space 4"},
    ],
    "edges": [
        ["earth", "luna"],
        ["earth", "space_1"],
        ["space_1", "venus"],
        ["venus", "mercury"],
        ["space_1", "space_2"],
        ["space_2", "mars"],
        ["mars", "phobos"],
        ["mars", "deimos"],
        ["space_2", "space_3"],
        ["space_3", "ceres"],
        ["space_3", "space_4"],
        ["space_4", "earth"],
    ],
}
