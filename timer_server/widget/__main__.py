"""Console widget: python -m timer_server.widget [--url URL] [--start SECONDS [--name NAME]]"""
import argparse
import asyncio
import logging
from typing import Optional

from timer_server.config import LOG_LEVEL, TIMER_LIMITS, TIMER_SERVER_URL
from .client import TimerApiClient
from .render import render_text
from .sync import TimerWidget

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"


def duration_arg(value: str) -> int:
    """argparse type for a timer duration in whole seconds"""
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number of seconds: {value!r}")
    if not TIMER_LIMITS["MIN_DURATION"] <= seconds <= TIMER_LIMITS["MAX_DURATION"]:
        raise argparse.ArgumentTypeError(
            f"must be between {TIMER_LIMITS['MIN_DURATION']} and {TIMER_LIMITS['MAX_DURATION']} seconds"
        )
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Console timer widget")
    parser.add_argument("--url", default=TIMER_SERVER_URL, help="Timer server base URL")
    parser.add_argument("--start", type=duration_arg, metavar="SECONDS", help="Start a timer on launch")
    parser.add_argument("--name", default="", help="Name for the --start timer")
    return parser


def _print_dashboard(widget: TimerWidget) -> None:
    print(CLEAR_SCREEN + render_text(widget), flush=True)


async def run(url: str, start: Optional[int] = None, name: str = "") -> None:
    api = TimerApiClient(base_url=url)
    widget = TimerWidget(api, on_render=_print_dashboard)
    try:
        await widget.sync_now()
        if start is not None:
            await widget.start_timer(name, start)
        widget.start()
        _print_dashboard(widget)
        await asyncio.Event().wait()
    finally:
        await widget.close()
        await api.aclose()


def main() -> None:
    args = build_parser().parse_args()

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    try:
        asyncio.run(run(args.url, args.start, args.name))
    except KeyboardInterrupt:
        logger.info("Widget stopped")


if __name__ == "__main__":
    main()
