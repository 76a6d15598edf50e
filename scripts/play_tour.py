#!/usr/bin/env python3
"""
Standalone Tour Player
======================

Plays a stored tour in the terminal, one step at a time.

Usage:
    python scripts/play_tour.py --owner mock-user-123 --list
    python scripts/play_tour.py --owner mock-user-123 --tour tour-1
    python scripts/play_tour.py --demo                 # play the sample tour, no database

Keys while playing:
    n / Enter  next step (or end the tour on the last step)
    p          previous step
    q          quit
"""

import argparse
import sys
from pathlib import Path

# Add project root for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from src.database.tour_store import SQLiteTourStore
from src.tours.fixtures import sample_tours
from src.tours.playback import PlaybackCursor


def render_step(cursor, out=sys.stdout):
    """Print the current step and the available actions."""
    step = cursor.current()
    out.write("\n" + "=" * 60 + "\n")
    out.write(f"  {cursor.position_label}\n")
    out.write("=" * 60 + "\n")
    out.write(f"  {step.text}\n")
    out.write(f"  [image] {step.image}\n\n")

    actions = []
    if cursor.can_go_back:
        actions.append("[p] Previous")
    if cursor.advance_label:
        actions.append(f"[n] {cursor.advance_label}")
    actions.append("[q] Quit")
    out.write("  " + "   ".join(actions) + "\n")


def play(tour, read_key=input, out=sys.stdout):
    """
    Interactive loop over a standalone PlaybackCursor.

    Returns True if the viewer reached "End Tour", False if they quit.
    """
    if not tour.steps:
        out.write(f"Tour '{tour.title}' has no steps.\n")
        return False

    cursor = PlaybackCursor(tour.steps, standalone=True)
    out.write(f"\nPlaying: {tour.title}\n")

    while True:
        render_step(cursor, out)
        try:
            key = read_key("> ").strip().lower()
        except EOFError:
            return False

        if key == 'q':
            return False
        if key == 'p':
            cursor.prev()
        elif key in ('', 'n'):
            if not cursor.next():
                out.write("\nEnd of tour. Thanks for watching!\n")
                return True


def list_tours(tours, out=sys.stdout):
    if not tours:
        out.write("No tours found.\n")
        return
    for tour in tours:
        visibility = 'Public' if tour.is_public else 'Private'
        out.write(f"  {tour.id:<36} {tour.title:<40} {len(tour.steps):>3} steps  "
                  f"{tour.analytics.views:>4} views  {visibility}\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Play a product tour in the terminal')
    parser.add_argument('--db', default=str(settings.database_path), help='SQLite database path')
    parser.add_argument('--owner', help='Owner user id')
    parser.add_argument('--tour', help='Tour id to play')
    parser.add_argument('--list', action='store_true', help='List the owner\'s tours')
    parser.add_argument('--demo', action='store_true', help='Play the built-in sample tour')
    args = parser.parse_args(argv)

    if args.demo:
        play(sample_tours()[0])
        return 0

    if not args.owner:
        parser.error('--owner is required unless --demo is given')

    store = SQLiteTourStore(args.db)
    store.init_schema()

    if args.list or not args.tour:
        list_tours(store.list(args.owner))
        return 0

    tour = store.get(args.tour, args.owner)
    if tour is None:
        print(f"Tour '{args.tour}' not found for this owner")
        return 1

    play(tour)
    return 0


if __name__ == "__main__":
    sys.exit(main())
