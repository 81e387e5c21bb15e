"""Orchestrator: main pipeline coordinator.

    MetricFetcher ─┐
                   ├─> RankMerger ─> window
    Fed report ────┘   (TableParser, curated fallback)

The metric and the report are fetched concurrently. Every failure degrades
to fallback data, so ``run()`` always returns a non-empty window.

Usage:
    orchestrator = Orchestrator()
    window = await orchestrator.run()
"""

import asyncio
import logging
from dataclasses import dataclass

from bankrank.clients.base import APIProviderError
from bankrank.clients.fed import FedReportClient
from bankrank.config import settings
from bankrank.models import Entity, Sourced
from bankrank.pipeline.merger import RankMerger
from bankrank.pipeline.metric import MetricFetcher
from bankrank.pipeline.parser import TableParser, extract_report_text
from bankrank.reference import FALLBACK_AS_OF, fallback_banks

logger = logging.getLogger(__name__)


@dataclass
class RankingResult:
    """Windowed ranking plus the provenance of its inputs.

    ``report`` holds the bank list that was merged, tagged PRIMARY when it
    was parsed from the live release and FALLBACK when curated.
    """

    entities: list[Entity]
    metric: Sourced[int]
    report: Sourced[list[Entity]]

    @property
    def inserted(self) -> Entity:
        return next(e for e in self.entities if e.is_inserted)

    @property
    def degraded(self) -> bool:
        """True if any input came from fallback data."""
        return self.metric.is_fallback or self.report.is_fallback

    def to_records(self) -> list[dict]:
        """Convert to the JSON array served to the presentation layer."""
        return [e.to_dict() for e in self.entities]


class Orchestrator:
    """Main pipeline orchestrator for BANKRANK.

    Args:
        metric_fetcher: Metric source (default: from settings)
        report_client: Fed release client (default: from settings)
        parser: Report parser (default: TableParser())
        merger: Rank merger (default: radius from settings)
        inserted_name: Label of the inserted entity (default: from settings)
    """

    def __init__(
        self,
        metric_fetcher: MetricFetcher | None = None,
        report_client: FedReportClient | None = None,
        parser: TableParser | None = None,
        merger: RankMerger | None = None,
        inserted_name: str | None = None,
    ) -> None:
        self.metric_fetcher = metric_fetcher or MetricFetcher()
        self.report_client = report_client or FedReportClient(
            base_url=settings.fed_base_url,
            report_path=settings.fed_report_path,
            user_agent=settings.user_agent,
            rate_limit=settings.http_rate_limit,
            timeout=settings.http_timeout,
            max_retries=settings.http_max_retries,
        )
        self.parser = parser or TableParser()
        self.merger = merger or RankMerger(radius=settings.window_radius)
        self.inserted_name = inserted_name or settings.inserted_name

    async def run(self) -> list[Entity]:
        """Return the windowed ranking. Never raises."""
        result = await self.run_with_provenance()
        return result.entities

    async def run_with_provenance(self) -> RankingResult:
        """Run the full pipeline and report which inputs were degraded."""
        try:
            metric, report = await asyncio.gather(
                self.metric_fetcher.fetch(),
                self.fetch_banks(),
                return_exceptions=True,
            )
            for outcome in (metric, report):
                if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                    raise outcome

            # A failure on one side leaves the other side's result in place
            if isinstance(metric, Exception):
                logger.error("Metric fetch failed: %s", metric, exc_info=metric)
                metric = self.metric_fetcher.fallback(f"pipeline error: {metric}")
            if isinstance(report, Exception):
                logger.error("Bank fetch failed: %s", report, exc_info=report)
                report = Sourced.fallback(fallback_banks(), f"pipeline error: {report}")

            entities = self.merger.merge(report.value, metric.value, self.inserted_name)
        except Exception as e:
            logger.error("Pipeline failed, serving curated data: %s", e, exc_info=True)
            metric = self.metric_fetcher.fallback(f"pipeline error: {e}")
            report = Sourced.fallback(fallback_banks(), f"pipeline error: {e}")
            entities = self.merger.merge(report.value, metric.value, self.inserted_name)

        result = RankingResult(entities=entities, metric=metric, report=report)
        logger.info(
            "%s at rank %d (metric: %s, banks: %s), returning %d entities",
            self.inserted_name, result.inserted.rank, metric.source.value,
            report.source.value, len(entities),
        )
        return result

    async def fetch_banks(self) -> Sourced[list[Entity]]:
        """Fetch and parse the Fed release, substituting curated data on failure."""
        try:
            async with self.report_client as client:
                body = await client.get_large_bank_report()
        except APIProviderError as e:
            logger.warning(
                "Fed release unavailable, using curated banks (%s): %s", FALLBACK_AS_OF, e,
            )
            return Sourced.fallback(fallback_banks(), f"report fetch failed: {e}")

        try:
            banks = self.parser.parse(extract_report_text(body))
        except Exception as e:
            logger.warning(
                "Fed release parse failed, using curated banks (%s): %s",
                FALLBACK_AS_OF, e, exc_info=True,
            )
            return Sourced.fallback(fallback_banks(), f"report parse failed: {e}")

        if not banks:
            logger.warning("Fed release unparseable, using curated banks (%s)", FALLBACK_AS_OF)
            return Sourced.fallback(fallback_banks(), "report parse found no rows")

        return Sourced.primary(banks)
