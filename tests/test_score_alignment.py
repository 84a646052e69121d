#!/usr/bin/env python3
"""
Test suite for score_alignment function.

Each test scores a hand-written aligned pair column by column and checks the
total against the scheme's match, mismatch and gap scores.
"""

import pytest
from needleman_wunsch import (
    score_alignment,
    align,
    ScoringScheme,
    DEFAULT_SCORING_SCHEME,
    UNIT_COST_SCHEME,
)


class TestBasicScoring:
    """Test column scoring without gaps."""

    def test_perfect_match(self):
        """Perfect match scores match_score per column."""
        assert score_alignment("ATCG", "ATCG") == 8

    def test_single_substitution(self):
        """Single nucleotide substitution."""
        assert score_alignment("ATCG", "ATCC") == 2 + 2 + 2 - 1

    def test_multiple_substitutions(self):
        """All columns mismatched."""
        assert score_alignment("ATCG", "GCTA") == -4

    def test_empty_alignment(self):
        """An empty alignment scores zero."""
        assert score_alignment("", "") == 0


class TestGapScoring:
    """Test gap columns in either sequence."""

    def test_gap_in_query(self):
        """Gap in query costs gap_score."""
        assert score_alignment("ACGT", "A-GT") == 2 - 2 + 2 + 2

    def test_gap_in_subject(self):
        """Gap in subject costs gap_score."""
        assert score_alignment("A-GT", "ACGT") == 4

    def test_contiguous_gaps_counted_per_position(self):
        """Linear gap model: every gap position is scored."""
        assert score_alignment("A---T", "ACGTT") == 2 - 6 + 2

    def test_custom_gap_char(self):
        """Gap character is configurable."""
        assert score_alignment("A.GT", "ACGT", gap_char='.') == 4
        # '-' is an ordinary character when another gap char is used
        assert score_alignment("A-GT", "ACGT", gap_char='.') == 2 - 1 + 2 + 2


class TestSchemes:
    """Test scoring under different schemes."""

    def test_unit_cost_scheme(self):
        """Unit cost counts edits as negative score."""
        assert score_alignment("kitten-", "sitting", UNIT_COST_SCHEME) == -3

    def test_custom_scheme(self):
        scheme = ScoringScheme(match_score=5, mismatch_score=-4, gap_score=-10)
        assert score_alignment("AC-T", "AGGT", scheme) == 5 - 4 - 10 + 5

    def test_default_scheme(self):
        assert score_alignment("--CA-CGTGATCAA", "AGCATCG-GTTG--", DEFAULT_SCORING_SCHEME) == -2


class TestValidation:
    """Invalid aligned pairs raise ValueError."""

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            score_alignment("ACGT", "ACG")

    def test_dual_gap_column(self):
        with pytest.raises(ValueError, match="gap in both"):
            score_alignment("A-GT", "A-GT")


class TestAgreementWithAlign:
    """Rescoring an alignment from align() reproduces its score."""

    @pytest.mark.parametrize("subject,query", [
        ("CACGTGATCAA", "AGCATCGGTTG"),
        ("GATTACA", "GCATGCT"),
        ("TTGACCA", "TTAGCCATT"),
    ])
    @pytest.mark.parametrize("scheme", [
        DEFAULT_SCORING_SCHEME,
        UNIT_COST_SCHEME,
        ScoringScheme(match_score=1, mismatch_score=-3, gap_score=-1),
    ])
    def test_rescore(self, subject, query, scheme):
        result = align(subject, query, scheme)
        assert score_alignment(result.aligned_subject, result.aligned_query, scheme) == result.score
