"""
Dev Navigator Adapter (NavigatorPort implementation).

Logs tab updates instead of driving a browser.
Used for local development, the CLI and testing.

Key behaviors:
- Logs every applied redirect
- Stores applied redirects in memory for test assertions
- Can be told to fail, to exercise error paths
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


@dataclass
class AppliedRedirect:
    """Record of a tab update for test assertions."""

    tab_id: int
    url: str
    applied_at: datetime


@dataclass
class DevNavigator:
    """
    Dev navigator that logs instead of updating a real tab.

    fail_with raises the given exception on apply; refuse makes apply
    return False. Either way the attempt is recorded in `attempts`.
    """

    log_level: int = logging.INFO
    fail_with: Exception | None = None
    refuse: bool = False
    applied: list[AppliedRedirect] = field(default_factory=list)
    attempts: list[tuple[int, str]] = field(default_factory=list)

    async def apply(self, tab_id: int, url: str) -> bool:
        self.attempts.append((tab_id, url))

        if self.fail_with is not None:
            raise self.fail_with
        if self.refuse:
            return False

        self.applied.append(
            AppliedRedirect(tab_id=tab_id, url=url, applied_at=datetime.now(UTC))
        )
        logger.log(self.log_level, "[DEV NAVIGATOR] tab %s -> %s", tab_id, url)
        return True

    def clear(self) -> None:
        self.applied.clear()
        self.attempts.clear()

    @property
    def last_url(self) -> str | None:
        return self.applied[-1].url if self.applied else None
