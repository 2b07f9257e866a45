"""Main application - drains the low-inventory email queue on a fixed interval."""
import argparse
import signal
import sys
import time
from typing import Callable, List, Optional

from lowstock_mailer.logging_conf import logger
from lowstock_mailer import settings
from lowstock_mailer.worker import QueueDrainWorker


class Application:
    """Runs drain cycles forever, sleeping a fixed interval between them."""

    def __init__(
        self,
        worker: Optional[QueueDrainWorker] = None,
        poll_interval: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.worker = worker
        self.poll_interval = poll_interval or settings.POLL_INTERVAL
        self.sleep = sleep
        self.running = False
        self.cycles = 0

    def start(self):
        """Start the application."""
        logger.info("=" * 50)
        logger.info("Low Inventory Alert Mailer")
        logger.info("=" * 50)
        logger.info(f"Poll interval: {self.poll_interval}s")
        logger.info("=" * 50)

        settings.validate_config()
        if self.worker is None:
            self.worker = QueueDrainWorker()
        logger.info(f"Mail transport: {self.worker.transport.name}")
        self.running = True
        logger.info("Started - watching for queued alerts")

    def stop(self):
        """Stop the application."""
        if not self.running:
            return
        self.running = False
        logger.info("Stopped")

    def run(self, max_cycles: Optional[int] = None):
        """Main loop."""
        self.start()

        while self.running:
            self.run_cycle()

            if max_cycles is not None and self.cycles >= max_cycles:
                break

            self._wait()

        self.stop()

    def run_cycle(self):
        """Run one drain cycle; any error is logged and ends the cycle."""
        self.cycles += 1
        try:
            return self.worker.drain_cycle()
        except Exception as e:
            logger.error(f"Error in main loop: {e}", exc_info=True)
            return None

    def _wait(self):
        """Sleep for the poll interval, waking each second to check for stop."""
        for _ in range(self.poll_interval):
            if not self.running:
                break
            self.sleep(1)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="lowstock-mailer", description="Low inventory alert email worker"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--once",
        action="store_true",
        help="Run a single drain cycle and exit.",
    )
    group.add_argument(
        "--max-cycles",
        type=positive_int,
        default=None,
        help="Number of drain cycles to run (default: run until terminated).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Entry point."""
    args = parse_args(argv)
    max_cycles = 1 if args.once else args.max_cycles

    app = Application()

    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}")
        app.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        app.run(max_cycles=max_cycles)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
