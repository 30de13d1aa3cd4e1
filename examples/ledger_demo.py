#!/usr/bin/env python3
"""
Example demonstrating the immutable table state and its transitions.

This script plays a short session between three friends without ever
modifying a state object, prints the log after each step and finally shows
who is up and who is down.
"""

import argparse
import logging

from potkeeper.events import EventBus
from potkeeper.ledger import HandOutcome, StateTransitionEngine
from potkeeper.ledger.messages import render_entry, format_entry_amount
from potkeeper.ledger.money import format_amount
from potkeeper.ledger.report import export_csv, player_balances


def print_table(state, locale):
    print(f"Pot: {format_amount(state.pot)}  Dealer: {state.dealer.name}"
          f"  Orbit: {state.dealer_round}")
    entry = state.logs[-1]
    amount = format_entry_amount(entry) or ""
    print(f"  {render_entry(entry, state, locale)} {amount}")
    print()


def main():
    parser = argparse.ArgumentParser(description="Scripted ledger session")
    parser.add_argument("--locale", default="en", help="log language (en or it)")
    parser.add_argument("--csv", default=None, help="write the log to this CSV file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    # Announce the interesting events as they happen
    bus = EventBus.get_instance()
    bus.on("BANK_BUSTED", lambda data: print(f">>> {data['challenger_name']} busts the bank"))
    bus.on("DEALER_ROTATED", lambda data: print(f">>> {data['dealer_name']} takes the bank"))

    print("Seating Alice, Bob and Carol with a €0.20 ante...")
    state = StateTransitionEngine.initialize(["Alice", "Bob", "Carol"], "0.20")
    alice, bob, carol = [player.id for player in state.players]
    print()

    state = StateTransitionEngine.start_round(state)
    print_table(state, args.locale)

    state = StateTransitionEngine.record_hand(state, bob, "0.50", HandOutcome.DEALER_WINS)
    print_table(state, args.locale)

    # Carol takes everything, so Bob gets the bank
    state = StateTransitionEngine.record_hand(state, carol, "1.10", HandOutcome.CHALLENGER_WINS)
    print_table(state, args.locale)

    state = StateTransitionEngine.start_round(state)
    state = StateTransitionEngine.record_hand(state, carol, "0.30", HandOutcome.CHALLENGER_WINS)
    state = StateTransitionEngine.record_hand(state, alice, "0.10", HandOutcome.DEALER_WINS)
    print_table(state, args.locale)

    state = StateTransitionEngine.close_bank(state)
    print_table(state, args.locale)

    print("Results:")
    for row in player_balances(state).itertuples():
        print(f"  {row.name:<6} {row.net:+.2f}")

    if args.csv:
        export_csv(state, args.csv, args.locale)
        print(f"Log written to {args.csv}")


if __name__ == "__main__":
    main()
