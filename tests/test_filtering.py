"""Tests for overlap deduplication."""

import itertools
import random

import pytest

from detection import Region, filter_overlapping_regions
from detection.filtering import regions_overlap
from geometry import overlap_ratio


def region(x, y, w, h, confidence=0.0):
    return Region(x=x, y=y, width=w, height=h, confidence=confidence)


class TestFilterOverlappingRegions:
    """Tests for the all-pairs overlap filter."""

    def test_empty_list(self):
        assert filter_overlapping_regions([]) == []

    def test_single_region_unchanged(self):
        only = region(0, 0, 4, 4)
        result = filter_overlapping_regions([only])
        assert result == [only]

    def test_low_overlap_keeps_everything(self):
        # Pairwise overlap of the first two is 0.25
        regions = [region(0, 0, 4, 4), region(2, 2, 4, 4), region(5, 5, 2, 2)]
        assert filter_overlapping_regions(regions) == regions

    def test_overlapping_pair_is_dropped_entirely(self):
        # Overlap 9/16 > 0.5 between the first two
        a = region(0, 0, 4, 4, confidence=90.0)
        b = region(1, 1, 4, 4, confidence=10.0)
        isolated = region(20, 20, 2, 2)

        result = filter_overlapping_regions([a, b, isolated])

        assert result == [isolated]

    def test_confidence_does_not_pick_a_survivor(self):
        big = region(0, 0, 10, 10, confidence=100.0)
        inside = region(2, 2, 3, 3, confidence=1.0)
        assert filter_overlapping_regions([big, inside]) == []
        assert filter_overlapping_regions([inside, big]) == []

    def test_threshold_is_strict(self):
        # Intersection 2x4 = 8, smaller area 16: exactly 0.5
        a = region(0, 0, 4, 4)
        b = region(2, 0, 4, 4)
        assert overlap_ratio(a.to_xywh(), b.to_xywh()) == 0.5
        assert filter_overlapping_regions([a, b]) == [a, b]

    def test_custom_threshold(self):
        a = region(0, 0, 4, 4)
        b = region(2, 2, 4, 4)
        assert filter_overlapping_regions([a, b], threshold=0.2) == []

    def test_chain_drops_every_linked_region(self):
        # a overlaps b, b overlaps c, a and c overlap below the threshold
        a = region(0, 0, 6, 4)
        b = region(2, 0, 6, 4)
        c = region(4, 0, 6, 4)
        assert overlap_ratio(a.to_xywh(), c.to_xywh()) < 0.5
        assert filter_overlapping_regions([a, b, c]) == []

    def test_input_not_modified(self):
        regions = [region(0, 0, 4, 4), region(1, 1, 4, 4)]
        snapshot = list(regions)
        filter_overlapping_regions(regions)
        assert regions == snapshot

    def test_order_independent(self):
        regions = [region(0, 0, 4, 4), region(1, 1, 4, 4), region(10, 0, 3, 3), region(0, 10, 2, 5)]
        expected = set(filter_overlapping_regions(regions))
        for perm in itertools.permutations(regions):
            assert set(filter_overlapping_regions(list(perm))) == expected

    @pytest.mark.parametrize("seed", range(10))
    def test_output_has_low_mutual_overlap(self, seed):
        rng = random.Random(seed)
        regions = [
            region(rng.randint(0, 40), rng.randint(0, 40), rng.randint(1, 15), rng.randint(1, 15))
            for _ in range(25)
        ]
        result = filter_overlapping_regions(regions)
        for r1, r2 in itertools.combinations(result, 2):
            assert overlap_ratio(r1.to_xywh(), r2.to_xywh()) <= 0.5


class TestRegionsOverlap:
    def test_symmetric(self):
        a = region(0, 0, 10, 10)
        b = region(5, 5, 2, 2)
        assert regions_overlap(a, b, 0.5)
        assert regions_overlap(b, a, 0.5)

    def test_disjoint(self):
        assert not regions_overlap(region(0, 0, 2, 2), region(3, 3, 2, 2), 0.0)
