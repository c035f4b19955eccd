import argparse
import asyncio

from pocket_arcade.config import VERBOSE
from pocket_arcade.engine import RunnerScheduler, RunnerSession, autopilot


def _print_scoreboard(distance, time):
    print(f"[Scoreboard] Distance: {distance} | Time: {time}s")


async def run_session(width, height, seed=None, steer=True):
    """Plays one real-time session in the console, with the autopilot steering."""
    session = RunnerSession(width, height, rng_seed=seed, verbose=VERBOSE)
    session.add_scoreboard_listener(_print_scoreboard)

    def _on_frame(snapshot):
        if steer and session.is_running:
            direction = autopilot(snapshot)
            if direction:
                session.move_player(direction)

    scheduler = RunnerScheduler(session, on_frame=_on_frame, verbose=VERBOSE)
    outcome = await scheduler.run()
    if outcome:
        print(f"--- {outcome.message} ---")
    return outcome


def main():
    parser = argparse.ArgumentParser(description="Run a real-time lane-runner session in the console.")
    parser.add_argument("--width", type=float, default=800.0)
    parser.add_argument("--height", type=float, default=800.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--manual", action="store_true", help="Disable the autopilot.")
    args = parser.parse_args()

    try:
        asyncio.run(run_session(args.width, args.height, seed=args.seed, steer=not args.manual))
    except KeyboardInterrupt:
        print("Runner stopped by user.")


if __name__ == "__main__":
    main()
