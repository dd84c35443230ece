# airwis: city air quality reports from the WAQI feed
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Chat command handling and console entry point.

``handle_command`` maps the text of an incoming chat message to the reply
that should be sent back. It knows nothing about a particular chat
transport, so any bot library can call it from its message handler.

Supported commands:
    /start, /help   list the commands
    /wis <city>     air quality report for a city

Usage:
    >>> from airwis.commands import handle_command
    >>> print(handle_command("/wis london"))
"""

import argparse
import logging
import sys
from logging import getLogger

from .config import FeedConfig, load_config
from .errors import AirwisError
from .feed import fetch_reading
from .render import render_report
from .report import derive_report, report_to_dataframe

logger = getLogger(__name__)

COMMANDS = {
    "start": "start the bot.",
    "help": "display this text.",
    "wis": "get pollution data for a city.",
}

USAGE = "Usage:\n/wis city_name"


def describe_commands() -> str:
    lines = ["These commands are supported:"]
    for name, description in COMMANDS.items():
        argument = " {city}" if name == "wis" else ""
        lines.append(f"/{name}{argument} — {description}")
    return "\n".join(lines)


def parse_command(text: str) -> tuple[str, str] | None:
    """
    Split a message into (command, argument).

    A ``@botname`` suffix on the command is ignored. Returns None when the
    message is not one of the supported commands.
    """
    text = (text or "").strip()
    if not text.startswith("/"):
        return None
    head, _, argument = text[1:].partition(" ")
    name = head.split("@", 1)[0].lower()
    if name not in COMMANDS:
        return None
    return name, argument.strip()


def get_city_report(city: str, config: FeedConfig | None = None) -> str:
    """
    Fetch, derive and render the report for a city.

    Raises:
        AirwisError: If the feed or any AQI conversion fails
    """
    reading = fetch_reading(city, config)
    entries = derive_report(reading)
    current = entries[0].aqi_result
    logger.info(
        f"City: {city}, Dominant pol: {reading.dominant_pollutant}, "
        f"value: {current.concentration}, => {current.aqi} ({current.category})"
    )
    return render_report(reading.city_name or city, entries)


def handle_command(text: str, config: FeedConfig | None = None) -> str | None:
    """
    Produce the reply for an incoming chat message.

    Args:
        text: Raw message text (e.g. "/wis london")
        config: Feed settings; read from the environment when omitted

    Returns:
        str | None: Reply text, or None if the message is not a command

    Feed and conversion failures are logged and answered with a single
    generic message; no partial report is sent.
    """
    parsed = parse_command(text)
    if parsed is None:
        return None

    name, city = parsed
    if name in ("start", "help"):
        return describe_commands()

    if not city:
        return USAGE

    try:
        return get_city_report(city, config)
    except AirwisError as e:
        logger.error(f"Failed to build report for {city}: {e}", exc_info=True)
        return f"Couldn't get data for {city}"


# ============================================================================
# CONSOLE ENTRY POINT
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airwis",
        description="Show the US EPA AQI report for a city from the WAQI feed.",
    )
    parser.add_argument("city", nargs="+", help="City name, e.g. london")
    parser.add_argument(
        "--table", action="store_true", help="Print a table instead of the chat text"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Request timeout in seconds"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    city = " ".join(args.city)

    try:
        config = load_config(timeout=args.timeout)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    try:
        if args.table:
            entries = derive_report(fetch_reading(city, config))
            print(report_to_dataframe(entries).to_string(index=False))
        else:
            print(get_city_report(city, config), end="")
    except AirwisError as e:
        logger.error(f"Failed to build report for {city}: {e}")
        print(f"Couldn't get data for {city}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
