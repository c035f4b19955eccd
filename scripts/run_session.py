"""
Utility script to run a single headless runner session.

Usage:
    python scripts/run_session.py --seed 7 --autopilot
    python scripts/run_session.py --seed 7 --dump replays/session_7.json

The session runs on simulated time, so a given seed and viewport always
replay the same way. --dump writes the per-tick telemetry as JSON.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when script is executed from anywhere
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.append(REPO_ROOT)

from pocket_arcade.config import VERBOSE  # noqa: E402
from pocket_arcade.engine import RunnerSession, TelemetryCollector, autopilot  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a headless lane-runner session.")
    parser.add_argument("--seed", type=int, default=42, help="Seed for spawn lanes and power-up types.")
    parser.add_argument("--width", type=float, default=800.0, help="Viewport width.")
    parser.add_argument("--height", type=float, default=800.0, help="Viewport height.")
    parser.add_argument("--max-ticks", type=int, default=10_000, help="Give up after this many frames.")
    parser.add_argument("--autopilot", action="store_true", help="Let a simple policy steer the player.")
    parser.add_argument("--dump", type=Path, help="Write per-tick telemetry JSON to this path.")
    parser.add_argument("--silent", action="store_true", help="Suppress per-event console output.")
    args = parser.parse_args()

    telemetry = TelemetryCollector() if args.dump else None
    session = RunnerSession(
        args.width,
        args.height,
        rng_seed=args.seed,
        telemetry=telemetry,
        verbose=VERBOSE and not args.silent,
    )
    session.run_until_finished(
        max_ticks=args.max_ticks,
        player_policy=autopilot if args.autopilot else None,
    )

    if session.outcome is None:
        print(f"Session did not finish within {args.max_ticks} ticks. {session.scoreboard_text()}")
    else:
        print(f"{session.outcome.message} {session.scoreboard_text()} (tick {session.outcome.tick})")

    if args.dump:
        args.dump.parent.mkdir(parents=True, exist_ok=True)
        args.dump.write_text(telemetry.to_json())
        print(f"Saved {len(telemetry.frames)} telemetry frames to {args.dump}.")


if __name__ == "__main__":
    main()
