#!/usr/bin/env python3
# main.py — Entry point: prompt for players, report what the acting player may do

from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

from board import build_default_board, load_board
from constants import MAX_PLAYERS, MIN_PLAYERS
from game import GameModel, new_game
from rules import RuleSet, load_rule_set


def prompt_players() -> List[str]:
    while True:
        raw = input(f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS}): ").strip()
        if raw.isdigit() and MIN_PLAYERS <= int(raw) <= MAX_PLAYERS:
            n = int(raw)
            break
        print(f"Please enter a number from {MIN_PLAYERS} to {MAX_PLAYERS}.")

    players: List[str] = []
    for i in range(n):
        while True:
            name = input(f"Player {i + 1} name: ").strip()
            if name and name not in players:
                players.append(name)
                break
            print("Name must be non-empty and unique.")
    return players


def legal_actions(model: GameModel) -> Dict[str, bool]:
    player = model.get_current_player()
    return {
        "buy node": model.is_node_purchaseable(),
        "buy fuel": model.is_fuel_purchaseable(),
        "buy fuel station": model.is_fuel_station_purchaseable(),
        "place fuel station": model.is_fuel_station_placeable(),
        "sell fuel station": model.is_fuel_station_salable_normally(),
        "sell node": model.is_node_salable_normally(),
        "negligence takeover": model.is_negligence_takeover_allowed(),
        "trade": model.is_trade_allowed() and bool(model.get_tradeable_players(player)),
        "fire lasers": model.is_laser_battle_allowed(),
    }


def print_board(model: GameModel) -> None:
    print("\nNodes:")
    for n in model.get_nodes():
        owner = "-" if n.owner is None else n.owner.name
        station = " F" if n.has_fuel_station else ""
        price = "-" if n.price == 0 else str(n.price)
        print(f"  {n.id:10} {n.name:14} price:{price:>5} owner:{owner:10}{station}")
    print()


def print_status(model: GameModel) -> None:
    print("Players:")
    for p in model.get_players():
        print(
            f"  {p.name:10} cash:{p.cash:6} fuel:{p.fuel:3} "
            f"stations:{p.fuel_stations:2} nodes:{len(p.owned_nodes):2} "
            f"worth:{model.get_total_worth(p):6} at:{p.current_node.id}"
        )
    player = model.get_current_player()
    print(f"\n{player.name} to act at {player.current_node}:")
    for action, allowed in legal_actions(model).items():
        print(f"  [{'x' if allowed else ' '}] {action}")
    print()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Set up a Solarquest game and list the legal actions.")
    parser.add_argument("--board", help="JSON board definition (defaults to the built-in solar system).")
    parser.add_argument("--rules", help="JSON rule file; omitted keys keep their defaults.")
    parser.add_argument("--verbose", action="store_true", help="Log setup details.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    board = load_board(args.board) if args.board else build_default_board()
    rule_set = load_rule_set(args.rules) if args.rules else RuleSet()

    model = new_game(prompt_players(), board=board, rule_set=rule_set)
    print_board(model)
    print_status(model)


if __name__ == "__main__":
    main()
