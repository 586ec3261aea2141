from __future__ import annotations

import argparse
import logging

from tictactoe.app.controller_pvc import PvCController, PvCConfig


def run_pvc(delay: float) -> None:
    cfg = PvCConfig(ai_delay_sec=delay, tick_sec=0.1)
    ctrl = PvCController(config=cfg)
    ctrl.run()


def main():
    ap = argparse.ArgumentParser(description="Play Tic Tac Toe against the computer.")
    ap.add_argument(
        "--delay",
        type=float,
        default=0.5,
        help="Seconds before the computer replies (default: 0.5)",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for messages on stderr (default: WARNING)",
    )

    args = ap.parse_args()
    if args.delay < 0:
        ap.error("--delay must be >= 0")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_pvc(args.delay)
    except KeyboardInterrupt:
        print("\nExiting...")


if __name__ == "__main__":
    main()
