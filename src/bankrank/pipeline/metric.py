"""MetricFetcher: Aave net deposits with layered degradation.

Strategies, best first:
1. Token Terminal metrics API (JSON 'net_deposits', billions USD)
2. Token Terminal explorer page, scanned by ordered ExtractionRules;
   the first candidate inside the PlausibleRange wins
3. Last-known-good value, else the static fallback constant

``fetch()`` never raises. The returned ``Sourced`` tells callers which
strategy produced the value.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Sequence

from bankrank.clients.token_terminal import TokenTerminalClient, TokenTerminalWebClient
from bankrank.config import settings
from bankrank.models import Sourced, billions_to_millions

logger = logging.getLogger(__name__)

BILLIONS = 1000.0  # multiplier to millions
MILLIONS = 1.0


class MetricExtractionError(ValueError):
    """A provider responded, but no usable metric value could be read."""


@dataclass(frozen=True)
class PlausibleRange:
    """Open interval of believable metric values, in billions USD."""

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum >= self.maximum:
            raise ValueError(f"Empty range: {self.minimum} >= {self.maximum}")

    def contains(self, billions: float) -> bool:
        return self.minimum < billions < self.maximum


@dataclass(frozen=True)
class ExtractionRule:
    """A text pattern whose first group is a number in an implied unit.

    Attributes:
        name: Identifier used in logs
        pattern: Compiled regex with one numeric capture group
        multiplier: Factor converting the captured number to millions USD
    """

    name: str
    pattern: re.Pattern
    multiplier: float

    def extract(self, text: str) -> float | None:
        """Return the first match converted to millions, or None."""
        match = self.pattern.search(text)
        if not match:
            return None
        try:
            return float(match.group(1).replace(",", "")) * self.multiplier
        except (IndexError, ValueError):
            return None


DEFAULT_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="label_colon_billions",
        pattern=re.compile(r"net[_\s-]?deposits[^:]*:\s*\$?(\d+\.?\d*)\s*[bB]", re.IGNORECASE),
        multiplier=BILLIONS,
    ),
    ExtractionRule(
        name="billions_before_label",
        pattern=re.compile(r"(\d+\.?\d*)\s*[bB].*net[_\s-]?deposits", re.IGNORECASE),
        multiplier=BILLIONS,
    ),
    ExtractionRule(
        name="json_value",
        pattern=re.compile(r'"net_deposits"[^}]*"value"[^:]*:\s*(\d+\.?\d*)', re.IGNORECASE),
        multiplier=BILLIONS,
    ),
    ExtractionRule(
        name="label_millions",
        pattern=re.compile(
            r"net[_\s-]?deposits[^:]*:\s*\$?(\d[\d,]*\.?\d*)\s*(?:M\b|million)",
            re.IGNORECASE,
        ),
        multiplier=MILLIONS,
    ),
)


class LastKnownGood:
    """Most recent confirmed metric value, used to seed the fallback.

    Lifecycle: empty at process start, updated only after a successful
    API or page fetch, never required for correctness.
    """

    def __init__(self) -> None:
        self.value: int | None = None

    def update(self, value: int) -> None:
        self.value = value

    def reset(self) -> None:
        self.value = None


# Process-wide default state
last_known_good = LastKnownGood()


class MetricFetcher:
    """Fetches the net deposits metric in millions USD.

    Clients are entered as async context managers per fetch.

    Usage:
        fetcher = MetricFetcher()
        result = await fetcher.fetch()
        print(result.value, result.source)

    Args:
        api_client: Metrics API client (default: from settings)
        web_client: Explorer page client (default: from settings)
        project_id: Token Terminal project id (default: from settings)
        plausible_range: Accepted scraped range in billions (default: from settings)
        fallback_value: Static fallback in millions (default: from settings)
        state: Last-known-good holder (default: process-wide instance)
        rules: Ordered page extraction rules
        metric_field: JSON field holding the value in billions
    """

    def __init__(
        self,
        api_client: TokenTerminalClient | None = None,
        web_client: TokenTerminalWebClient | None = None,
        project_id: str | None = None,
        plausible_range: PlausibleRange | None = None,
        fallback_value: int | None = None,
        state: LastKnownGood | None = None,
        rules: Sequence[ExtractionRule] = DEFAULT_RULES,
        metric_field: str = "net_deposits",
    ) -> None:
        self.api_client = api_client or TokenTerminalClient(
            base_url=settings.token_terminal_api_url,
            user_agent=settings.user_agent,
            rate_limit=settings.http_rate_limit,
            timeout=settings.http_timeout,
            max_retries=settings.http_max_retries,
        )
        self.web_client = web_client or TokenTerminalWebClient(
            base_url=settings.token_terminal_web_url,
            user_agent=settings.user_agent,
            rate_limit=settings.http_rate_limit,
            timeout=settings.http_timeout,
            max_retries=settings.http_max_retries,
        )
        self.project_id = project_id or settings.project_id
        self.plausible_range = plausible_range or PlausibleRange(
            minimum=settings.metric_min_billions,
            maximum=settings.metric_max_billions,
        )
        self.fallback_value = fallback_value or settings.metric_fallback_millions
        self.state = state if state is not None else last_known_good
        self.rules = rules
        self.metric_field = metric_field

    async def fetch(self) -> Sourced[int]:
        """Return the metric, degrading through API → page → fallback."""
        reasons: list[str] = []

        try:
            value = await self._fetch_from_api()
            logger.info("%s net deposits from API: %d M", self.project_id, value)
            self.state.update(value)
            return Sourced.primary(value)
        except Exception as e:
            logger.warning("Metrics API unusable, trying explorer page: %s", e)
            reasons.append(f"api: {e}")

        try:
            value = await self._fetch_from_page()
            logger.info("%s net deposits from explorer page: %d M", self.project_id, value)
            self.state.update(value)
            return Sourced.secondary(value)
        except Exception as e:
            logger.warning("Explorer page unusable, using fallback: %s", e)
            reasons.append(f"page: {e}")

        return self._fallback("; ".join(reasons))

    def fallback(self, reason: str) -> Sourced[int]:
        """Fallback value without any network call."""
        return self._fallback(reason)

    def _fallback(self, reason: str) -> Sourced[int]:
        if self.state.value is not None:
            value = self.state.value
            reason = f"{reason} (last known good)"
        else:
            value = self.fallback_value
        logger.warning(
            "Using fallback %s net deposits: %d M ($%.3fB)",
            self.project_id, value, value / 1000,
        )
        return Sourced.fallback(value, reason)

    async def _fetch_from_api(self) -> int:
        async with self.api_client as client:
            data = await client.get_project_metrics(self.project_id)
        billions = self._read_billions(data)
        return billions_to_millions(billions)

    def _read_billions(self, data: Any) -> float:
        if not isinstance(data, dict) or self.metric_field not in data:
            raise MetricExtractionError(f"'{self.metric_field}' missing from API response")

        raw = data[self.metric_field]
        if isinstance(raw, bool):
            raise MetricExtractionError(f"'{self.metric_field}' is not numeric: {raw!r}")
        try:
            billions = float(raw)
        except (TypeError, ValueError):
            raise MetricExtractionError(f"'{self.metric_field}' is not numeric: {raw!r}")

        if not math.isfinite(billions) or billions <= 0:
            raise MetricExtractionError(f"'{self.metric_field}' is not positive: {raw!r}")
        return billions

    async def _fetch_from_page(self) -> int:
        async with self.web_client as client:
            text = await client.get_net_deposits_page(self.project_id)

        for rule in self.rules:
            millions = rule.extract(text)
            if millions is None:
                continue
            billions = millions / 1000
            if self.plausible_range.contains(billions):
                logger.debug("Rule %s matched: %.3fB", rule.name, billions)
                return round(millions)
            logger.debug(
                "Rule %s matched %.3fB outside (%.1f, %.1f)",
                rule.name, billions, self.plausible_range.minimum, self.plausible_range.maximum,
            )

        raise MetricExtractionError("no plausible net deposits value on page")
