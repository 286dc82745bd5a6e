"""
Tests for the motif matcher and its filters.
"""

import pytest

from elmasker.core.models import InstanceRecord, LogicLabel, MotifClass, Region
from elmasker.motifs.library import MotifPatternError
from elmasker.motifs.matcher import FilterConfig, assign
from elmasker.scoring import score


def make_motif(pattern, identifier="LIG_TEST_1", instances=()):
    return MotifClass(
        accession="ELME999999",
        identifier=identifier,
        pattern=pattern,
        probability=0.001,
        instances=list(instances),
    )


class TestAssignBasics:
    """Pattern scanning without filters."""

    def test_single_occurrence(self, avl_motif):
        occurrences = assign(avl_motif, "MSTAVLPRQ")
        assert len(occurrences) == 1
        occ = occurrences[0]
        assert (occ.start, occ.end) == (4, 6)
        assert occ.text == "AVL"
        assert occ.motif_id == "LIG_TEST_AVL"

    def test_occurrence_is_scored(self, avl_motif):
        occ = assign(avl_motif, "MSTAVLPRQ")[0]
        expected = score("AVL")
        assert occ.probability == pytest.approx(expected.probability)
        assert occ.entropy == pytest.approx(expected.entropy)
        assert occ.entropy_rate == pytest.approx(expected.entropy_rate)

    def test_no_match_returns_none(self, avl_motif):
        assert assign(avl_motif, "MSTPRQ") is None

    def test_matches_do_not_overlap_within_motif(self):
        occurrences = assign(make_motif("AA"), "AAAAA")
        assert [(o.start, o.end) for o in occurrences] == [(1, 2), (3, 4)]

    def test_scan_order(self):
        occurrences = assign(make_motif("P[RK]"), "PRAAPKAAPR")
        assert [o.start for o in occurrences] == [1, 5, 9]
        assert [o.text for o in occurrences] == ["PR", "PK", "PR"]

    def test_soft_masked_input_still_matches(self, avl_motif):
        occ = assign(avl_motif, "mstavlprq")[0]
        assert (occ.start, occ.end, occ.text) == (4, 6, "AVL")

    def test_zero_length_matches_ignored(self):
        occurrences = assign(make_motif("A*"), "MSTAVL")
        assert [(o.start, o.end) for o in occurrences] == [(4, 4)]

    def test_anchored_pattern(self):
        assert assign(make_motif("^M"), "MSTMA")[0].start == 1
        assert assign(make_motif("A$"), "MSTMA")[0].start == 5


class TestLogicFilter:
    """Rejection of matches equal to curated instances."""

    def test_false_positive_instance_rejected(self, avl_motif):
        config = FilterConfig(logic_filter=True)
        assert assign(avl_motif, "MSTAVLPRQ", config) is None

    def test_filter_off_keeps_match(self, avl_motif):
        assert assign(avl_motif, "MSTAVLPRQ", FilterConfig()) is not None

    def test_other_label_not_rejected(self, avl_motif):
        config = FilterConfig(logic_filter=True, logic_label=LogicLabel.TRUE_POSITIVE)
        assert len(assign(avl_motif, "MSTAVLPRQ", config)) == 1

    def test_only_exact_text_rejected(self):
        motif = make_motif("P[RK]", instances=[
            InstanceRecord(
                accession="ELMI1", motif_id="LIG_TEST_1", protein_id="P1",
                start=1, end=2, logic=LogicLabel.FALSE_POSITIVE, sequence="PR",
            ),
        ])
        occurrences = assign(motif, "PRAAPK", FilterConfig(logic_filter=True))
        assert [o.text for o in occurrences] == ["PK"]


class TestScoreFilters:
    """Probability ceiling and entropy-rate floor."""

    def test_probability_ceiling(self, avl_motif):
        p = score("AVL").probability
        assert assign(avl_motif, "MSTAVL", FilterConfig(max_probability=p / 2)) is None
        assert assign(avl_motif, "MSTAVL", FilterConfig(max_probability=p * 2)) is not None

    def test_probability_equal_to_ceiling_kept(self, avl_motif):
        p = score("AVL").probability
        assert assign(avl_motif, "MSTAVL", FilterConfig(max_probability=p)) is not None

    def test_entropy_rate_floor(self, avl_motif):
        rate = score("AVL").entropy_rate
        assert assign(avl_motif, "MSTAVL", FilterConfig(min_entropy_rate=rate + 0.01)) is None
        assert assign(avl_motif, "MSTAVL", FilterConfig(min_entropy_rate=rate - 0.01)) is not None

    def test_low_complexity_match_dropped(self):
        """Tryptophan repeats carry little probability mass per residue."""
        motif = make_motif("W{4}|AVLS")
        floor = score("WWWW").entropy_rate + 0.01
        occurrences = assign(motif, "WWWWAVLS", FilterConfig(min_entropy_rate=floor))
        assert [o.text for o in occurrences] == ["AVLS"]


class TestRegionFilters:
    """MoRF and disorder overlap filters."""

    def test_morf_overlap_required(self, avl_motif):
        config = FilterConfig(morf_filter=True)
        assert assign(avl_motif, "MSTAVLPRQ", config, morf_regions=[Region(start=1, end=3)]) is None
        kept = assign(avl_motif, "MSTAVLPRQ", config, morf_regions=[Region(start=6, end=9)])
        assert len(kept) == 1

    def test_disorder_overlap_required(self, avl_motif):
        config = FilterConfig(disorder_filter=True)
        assert assign(avl_motif, "MSTAVLPRQ", config, disorder_regions=[]) is None
        kept = assign(avl_motif, "MSTAVLPRQ", config, disorder_regions=[Region(start=2, end=4)])
        assert len(kept) == 1

    def test_both_region_filters(self, avl_motif):
        config = FilterConfig(morf_filter=True, disorder_filter=True)
        result = assign(
            avl_motif, "MSTAVLPRQ", config,
            morf_regions=[Region(start=4, end=4)],
            disorder_regions=[Region(start=7, end=9)],
        )
        assert result is None

    def test_missing_regions_is_an_error(self, avl_motif):
        with pytest.raises(ValueError, match="MoRF"):
            assign(avl_motif, "MSTAVL", FilterConfig(morf_filter=True))
        with pytest.raises(ValueError, match="Disorder"):
            assign(avl_motif, "MSTAVL", FilterConfig(disorder_filter=True))

    def test_needs_predictor(self):
        assert FilterConfig().needs_predictor is False
        assert FilterConfig(morf_filter=True).needs_predictor is True
        assert FilterConfig(disorder_filter=True).needs_predictor is True


class TestPatternErrors:
    """Motifs whose pattern cannot be compiled."""

    def test_uncompilable_pattern(self):
        motif = MotifClass.model_construct(
            accession="ELME999999", identifier="LIG_BROKEN", pattern="[AV", probability=0.1,
        )
        with pytest.raises(MotifPatternError, match="LIG_BROKEN"):
            assign(motif, "MSTAVL")
