# inventory_tracker/services/health_checker.py

"""Connectivity health check for the products API."""

import asyncio
import logging
import time
from dataclasses import dataclass

from curl_cffi import requests as curl_requests

from inventory_tracker.config.settings import Settings

logger = logging.getLogger("inventory_tracker.health")


@dataclass
class HealthResult:
    """Result of a single API health probe."""

    target: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_api(base_url: str) -> HealthResult:
    """Probe ``GET /health`` on *base_url*."""
    url = f"{base_url.rstrip('/')}/health"
    start = time.monotonic()
    try:
        resp = curl_requests.get(
            url,
            headers=Settings.DEFAULT_HEADERS,
            timeout=Settings.HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                target=url,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > Settings.SLOW_RESPONSE_MS:
            return HealthResult(
                target=url,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            target=url,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            target=url,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Runs the API probe off the event loop."""

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = base_url or Settings.API_BASE_URL

    async def check(self) -> HealthResult:
        """Probe the configured API and log the outcome."""
        result = await asyncio.to_thread(probe_api, self.base_url)
        logger.info(
            "Health check %s: %s (%.0fms) %s",
            result.target,
            result.status,
            result.latency_ms,
            result.message,
        )
        return result
