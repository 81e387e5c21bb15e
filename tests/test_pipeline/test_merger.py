"""Tests for RankMerger: insertion, re-ranking and windowing."""

import pytest

from bankrank.models import Entity
from bankrank.pipeline.merger import RankMerger


def make_banks(*values: int) -> list[Entity]:
    """Helper: banks named B1..Bn ranked in the given order."""
    return [Entity(rank=i, name=f"B{i}", value=v) for i, v in enumerate(values, start=1)]


def summary(entities: list[Entity]) -> list[tuple[str, int, int]]:
    return [(e.name, e.value, e.rank) for e in entities]


class TestMergeScenarios:
    """Worked examples."""

    def test_inserts_between_neighbors(self) -> None:
        """[A 100, B 80, C 50] + 90 → A, INSERTED, B, C."""
        banks = [
            Entity(rank=1, name="A", value=100),
            Entity(rank=2, name="B", value=80),
            Entity(rank=3, name="C", value=50),
        ]

        result = RankMerger().merge(banks, inserted_value=90, inserted_name="INSERTED")

        assert summary(result) == [
            ("A", 100, 1),
            ("INSERTED", 90, 2),
            ("B", 80, 3),
            ("C", 50, 4),
        ]
        assert [e.is_inserted for e in result] == [False, True, False, False]

    def test_empty_list(self) -> None:
        """Empty list → inserted entity alone at rank 1."""
        result = RankMerger().merge([], inserted_value=50, inserted_name="INSERTED")

        assert summary(result) == [("INSERTED", 50, 1)]
        assert result[0].is_inserted

    def test_smallest_value_goes_last(self) -> None:
        """No entity is smaller → inserted at the end."""
        result = RankMerger().merge(make_banks(300, 200), inserted_value=10, inserted_name="X")

        assert summary(result)[-1] == ("X", 10, 3)

    def test_largest_value_goes_first(self) -> None:
        result = RankMerger().merge(make_banks(300, 200), inserted_value=999, inserted_name="X")

        assert summary(result)[0] == ("X", 999, 1)

    def test_equal_value_inserted_after_ties(self) -> None:
        """Insertion point is the first strictly smaller value."""
        result = RankMerger().merge(make_banks(100, 90, 90, 80), inserted_value=90, inserted_name="X")

        assert [e.name for e in result] == ["B1", "B2", "B3", "X", "B4"]


class TestRankingInvariants:
    """Properties that hold for every merge."""

    @pytest.mark.parametrize(
        "values,inserted",
        [
            ((), 1),
            ((5,), 5),
            ((10, 50, 30, 20, 40), 35),
            ((70, 70, 70), 70),
            (tuple(range(1000, 0, -7)), 500),
            ((1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12), 0),
        ],
    )
    def test_ranks_contiguous_and_sorted(self, values, inserted) -> None:
        ranked = RankMerger().rank(make_banks(*values), inserted, "X")

        assert [e.rank for e in ranked] == list(range(1, len(values) + 2))
        assert all(a.value >= b.value for a, b in zip(ranked, ranked[1:]))
        flagged = [e for e in ranked if e.is_inserted]
        assert len(flagged) == 1
        assert flagged[0].value == inserted

    def test_stable_sort_keeps_tie_order(self) -> None:
        """Ties keep their original relative order."""
        banks = [
            Entity(rank=1, name="LOW", value=10),
            Entity(rank=2, name="TIE_FIRST", value=50),
            Entity(rank=3, name="TIE_SECOND", value=50),
        ]

        ranked = RankMerger().rank(banks, 1, "X")

        assert [e.name for e in ranked] == ["TIE_FIRST", "TIE_SECOND", "LOW", "X"]

    def test_unsorted_input_is_sorted(self) -> None:
        ranked = RankMerger().rank(make_banks(10, 30, 20), 25, "X")

        assert [e.value for e in ranked] == [30, 25, 20, 10]

    def test_idempotent_and_input_untouched(self) -> None:
        banks = make_banks(10, 30, 20, 40)
        before = list(banks)
        merger = RankMerger()

        first = merger.merge(banks, 25, "X")
        second = merger.merge(banks, 25, "X")

        assert first == second
        assert banks == before

    def test_previous_inserted_entity_is_replaced(self) -> None:
        """Merging an already-merged list keeps a single inserted entity."""
        merger = RankMerger()
        once = merger.rank(make_banks(100, 50), 75, "X")

        twice = merger.rank(once, 60, "X")

        flagged = [e for e in twice if e.is_inserted]
        assert len(flagged) == 1
        assert flagged[0].value == 60
        assert len(twice) == 3


class TestWindow:
    """Window selection around the inserted rank."""

    def test_full_window_in_middle(self) -> None:
        """Inserted far from both ends → 11 entities, inserted in the middle."""
        banks = make_banks(*range(100, 0, -1))  # 100..1

        result = RankMerger().merge(banks, inserted_value=50, inserted_name="X")

        assert len(result) == 11
        assert result[5].is_inserted
        assert result[0].rank == result[5].rank - 5
        assert result[-1].rank == result[5].rank + 5

    def test_clamped_at_top(self) -> None:
        """Lower bound clamps at 1 without extending the upper bound."""
        banks = make_banks(*range(100, 0, -1))

        result = RankMerger().merge(banks, inserted_value=99, inserted_name="X")

        inserted = next(e for e in result if e.is_inserted)
        assert inserted.rank == 3
        assert [e.rank for e in result] == list(range(1, 9))

    def test_clamped_at_bottom(self) -> None:
        banks = make_banks(*range(100, 0, -1))

        result = RankMerger().merge(banks, inserted_value=0, inserted_name="X")

        assert [e.rank for e in result] == list(range(96, 102))
        assert result[-1].is_inserted

    def test_small_list_returned_whole(self) -> None:
        result = RankMerger().merge(make_banks(30, 20), inserted_value=25, inserted_name="X")

        assert len(result) == 3

    def test_custom_radius(self) -> None:
        banks = make_banks(*range(100, 0, -1))

        result = RankMerger(radius=2).merge(banks, inserted_value=50, inserted_name="X")

        assert len(result) == 5
        assert result[2].is_inserted

    def test_zero_radius_returns_inserted_only(self) -> None:
        result = RankMerger(radius=0).merge(make_banks(30, 20, 10), 15, "X")

        assert summary(result) == [("X", 15, 3)]

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError):
            RankMerger(radius=-1)

    def test_window_without_inserted_entity(self) -> None:
        banks = make_banks(3, 2, 1)

        assert RankMerger().window(banks) == banks
