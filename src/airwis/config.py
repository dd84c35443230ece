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
Runtime configuration for the WAQI feed client.

Settings are read from the environment:

- AQI_TOKEN: WAQI access token (required). Get one at https://aqicn.org/data-platform/token/
- AIRWIS_TIMEOUT: Request timeout in seconds (default: 10)
- AIRWIS_API_BASE: Feed base URL (default: https://api.waqi.info)
"""

import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://api.waqi.info"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class FeedConfig:
    """Connection settings for the air quality feed."""

    token: str
    timeout: float = DEFAULT_TIMEOUT  # seconds
    api_base: str = DEFAULT_API_BASE

    def __repr__(self) -> str:
        # Keep the token out of logs
        return (
            f"FeedConfig(token='***', timeout={self.timeout}, "
            f"api_base='{self.api_base}')"
        )


def _get_api_token() -> str:
    """
    Get the WAQI token from environment.

    Raises:
        ValueError: If the token is not configured
    """
    token = os.getenv("AQI_TOKEN")
    if not token:
        raise ValueError(
            "WAQI token required. Set AQI_TOKEN in your environment or .env file. "
            "Get your free token at: https://aqicn.org/data-platform/token/"
        )
    return token


def _get_timeout() -> float:
    raw = os.getenv("AIRWIS_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(
            f"AIRWIS_TIMEOUT must be a number of seconds, got '{raw}'"
        ) from None
    if timeout <= 0:
        raise ValueError(f"AIRWIS_TIMEOUT must be positive, got {timeout}")
    return timeout


def load_config(timeout: float | None = None) -> FeedConfig:
    """
    Build a FeedConfig from the environment.

    Args:
        timeout: Override the configured timeout (seconds)

    Returns:
        FeedConfig: Settings for the feed client

    Raises:
        ValueError: If AQI_TOKEN is missing or AIRWIS_TIMEOUT is invalid
    """
    if timeout is not None and timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")
    return FeedConfig(
        token=_get_api_token(),
        timeout=timeout if timeout is not None else _get_timeout(),
        api_base=(os.getenv("AIRWIS_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
    )
