"""Core data types for the ranking pipeline.

Entity values are in one shared unit across a result set: millions of USD,
the native unit of the Federal Reserve release. Metric values reported in
billions are converted with ``billions_to_millions`` before merging.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


def billions_to_millions(billions: float) -> int:
    """Convert a billions-USD figure to whole millions USD."""
    return round(billions * 1000)


@dataclass(frozen=True)
class Entity:
    """One ranked item: a bank, or the inserted metric entity."""

    rank: int
    name: str
    value: int
    is_inserted: bool = False

    def to_dict(self) -> dict:
        """Convert to the presentation record ``{rank, name, assets, isAave?}``."""
        record = {"rank": self.rank, "name": self.name, "assets": self.value}
        if self.is_inserted:
            record["isAave"] = True
        return record


class Source(Enum):
    """Where a pipeline value came from, best first."""

    PRIMARY = "primary"  # Structured API / parsed report
    SECONDARY = "secondary"  # Scraped page
    FALLBACK = "fallback"  # Static constant, curated dataset or last-known-good


@dataclass(frozen=True)
class Sourced(Generic[T]):
    """A value tagged with its provenance.

    Lets "always succeed" operations report degradation without raising.
    ``reason`` is set only for fallbacks.
    """

    value: T
    source: Source
    reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source is Source.FALLBACK

    @classmethod
    def primary(cls, value: T) -> "Sourced[T]":
        return cls(value=value, source=Source.PRIMARY)

    @classmethod
    def secondary(cls, value: T) -> "Sourced[T]":
        return cls(value=value, source=Source.SECONDARY)

    @classmethod
    def fallback(cls, value: T, reason: str) -> "Sourced[T]":
        return cls(value=value, source=Source.FALLBACK, reason=reason)
