"""RankMerger: insert the metric entity into the bank ranking.

Steps:
1. Stable sort by value, descending
2. Insert before the first entity with a strictly smaller value
3. Re-rank 1..N by position
4. Keep only ranks within ``radius`` of the inserted entity

Pure: inputs are never mutated, so repeated merges give identical output.
"""

import logging
from dataclasses import replace

from bankrank.models import Entity

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 5


class RankMerger:
    """Merges an inserted value into a ranked entity list.

    Usage:
        merger = RankMerger(radius=5)
        window = merger.merge(banks, inserted_value=68300, inserted_name="AAVE")

    Args:
        radius: Ranks kept on each side of the inserted entity (default: 5)
    """

    def __init__(self, radius: int = DEFAULT_RADIUS) -> None:
        if radius < 0:
            raise ValueError(f"radius must be >= 0, got {radius}")
        self.radius = radius

    def rank(
        self,
        entities: list[Entity],
        inserted_value: int,
        inserted_name: str,
    ) -> list[Entity]:
        """Return the full re-ranked list including the inserted entity.

        Entities already flagged as inserted are dropped so that at most
        one inserted entity exists in the output.
        """
        ordered = sorted(
            (e for e in entities if not e.is_inserted),
            key=lambda e: e.value,
            reverse=True,
        )

        insert_index = next(
            (i for i, e in enumerate(ordered) if e.value < inserted_value),
            len(ordered),
        )
        ordered.insert(
            insert_index,
            Entity(rank=insert_index + 1, name=inserted_name, value=inserted_value, is_inserted=True),
        )

        if logger.isEnabledFor(logging.DEBUG):
            above = ordered[insert_index - 1] if insert_index > 0 else None
            below = ordered[insert_index + 1] if insert_index + 1 < len(ordered) else None
            logger.debug(
                "%s (%d) inserted at rank %d; above=%s below=%s",
                inserted_name, inserted_value, insert_index + 1,
                f"{above.name} ({above.value})" if above else None,
                f"{below.name} ({below.value})" if below else None,
            )

        return [replace(e, rank=i) for i, e in enumerate(ordered, start=1)]

    def window(self, ranked: list[Entity]) -> list[Entity]:
        """Select ranks in ``[max(1, R - radius), R + radius]`` around inserted rank R.

        The lower bound clamps at 1 without widening the upper bound.
        Returns the input unchanged if it has no inserted entity.
        """
        inserted = next((e for e in ranked if e.is_inserted), None)
        if inserted is None:
            return list(ranked)

        start = max(1, inserted.rank - self.radius)
        end = inserted.rank + self.radius
        return [e for e in ranked if start <= e.rank <= end]

    def merge(
        self,
        entities: list[Entity],
        inserted_value: int,
        inserted_name: str,
    ) -> list[Entity]:
        """Rank ``entities`` with the inserted value and return the window."""
        ranked = self.rank(entities, inserted_value, inserted_name)
        result = self.window(ranked)
        logger.info(
            "Merged %s into %d entities, returning ranks %d-%d",
            inserted_name, len(entities), result[0].rank, result[-1].rank,
        )
        return result
