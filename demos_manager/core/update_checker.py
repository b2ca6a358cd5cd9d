"""
Checks the project website for a newer release.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

import aiohttp

from demos_manager import __version__
from demos_manager.exceptions import InvalidVersionError
from demos_manager.models.version import AppVersion

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class UpdateStatus(Enum):
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    CHECK_FAILED = "check_failed"


@dataclass(frozen=True)
class UpdateCheckResult:
    status: UpdateStatus
    latest_version: AppVersion | None = None
    error: str | None = None

    @property
    def update_available(self) -> bool:
        return self.status is UpdateStatus.UPDATE_AVAILABLE


def build_update_url(base_url: str) -> str:
    """The update endpoint lives at `{base_url}/update`."""
    return base_url.rstrip("/") + "/update"


class UpdateChecker:
    """
    Issues a single GET to the update endpoint, which answers with the latest
    version as plain text.

    Every failure (network error, timeout, non-200 status, unparsable body)
    yields CHECK_FAILED instead of raising, so startup is never aborted.
    """

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds, connect=min(timeout_seconds, 5.0)
        )

    async def check_for_update(
        self, current_version: AppVersion | str, endpoint_url: str
    ) -> UpdateCheckResult:
        current = AppVersion.coerce(current_version)
        try:
            latest = await self._fetch_latest_version(endpoint_url)
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            InvalidVersionError,
            UnicodeDecodeError,
        ) as e:
            error = str(e) or type(e).__name__
            log.debug(f"Update check against {endpoint_url} failed: {error}")
            return UpdateCheckResult(UpdateStatus.CHECK_FAILED, error=error)

        if current < latest:
            log.info(f"[cyan]A new version is available: {latest}[/cyan]")
            return UpdateCheckResult(UpdateStatus.UPDATE_AVAILABLE, latest_version=latest)

        log.debug(f"Running version {current} is up to date (latest {latest}).")
        return UpdateCheckResult(UpdateStatus.UP_TO_DATE, latest_version=latest)

    async def _fetch_latest_version(self, endpoint_url: str) -> AppVersion:
        async with (
            aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": f"demos-manager/{__version__}"},
            ) as session,
            session.get(endpoint_url) as response,
        ):
            if response.status != 200:
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=f"Unexpected status {response.status}",
                )
            body = await response.text()
        return AppVersion.parse(body)
