"""Watch a serial foot pedal and print every press Drawboy would act on.

Useful when wiring a new pedal: presses inside the debounce window and
presses that arrive between two polls are coalesced exactly as in the app.
Usage:

    python tools/pedal_monitor.py --port /dev/ttyUSB0
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_ensure_repo_root_on_path()

from app.core.pedal import PedalLatch  # noqa: E402
from app.drivers.serial_pedal import DEFAULT_BAUD, DEFAULT_TRIGGER, SerialPedal  # noqa: E402

POLL_INTERVAL_S = 0.05


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--port", required=True, help="Serial port (e.g. COM5 or /dev/ttyUSB0)")
    parser.add_argument(
        "--baud",
        type=int,
        default=DEFAULT_BAUD,
        help=f"Baud rate (default: {DEFAULT_BAUD})",
    )
    parser.add_argument(
        "--trigger",
        default=DEFAULT_TRIGGER,
        help=f"Line the pedal sends per press (default: {DEFAULT_TRIGGER})",
    )
    args = parser.parse_args(argv)

    latch = PedalLatch()
    pedal = SerialPedal(latch, trigger=args.trigger)
    try:
        pedal.open(args.port, baudrate=args.baud)
    except Exception as exc:  # pragma: no cover - I/O setup
        print(f"Failed to open {args.port}: {exc}", file=sys.stderr)
        return 1

    print("Watching pedal. Ctrl+C to quit.")
    steps = 0
    try:
        while True:
            if latch.consume():
                steps += 1
                print(f"[pedal] step {steps} (raw presses: {pedal.presses})")
            time.sleep(POLL_INTERVAL_S)
    except KeyboardInterrupt:
        print()
    finally:
        pedal.close()

    return 0


if __name__ == "__main__":  # pragma: no cover - manual entrypoint
    raise SystemExit(main())
