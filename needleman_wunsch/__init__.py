#!/usr/bin/env python3
"""
Copyright (c) 2025, Josh Walker

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

Needleman-Wunsch Global Alignment for DNA Sequences

This module builds the full dynamic-programming score matrix for two
sequences under a linear match/mismatch/gap scoring scheme, traces back one
optimal global alignment, and renders the matrix and alignment as text.

Ties between equally scoring predecessors are always broken in the order
UP, LEFT, DIAGONAL, so the returned alignment is deterministic.
"""

import edlib
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

GAP_CHAR = '-'


class Trace(Enum):
    """Predecessor of a score matrix cell."""
    UP = 'up'              # Gap in query
    LEFT = 'left'          # Gap in subject
    DIAGONAL = 'diagonal'  # Match or mismatch


@dataclass(frozen=True)
class Cell:
    """One entry of the score matrix."""
    score: int
    trace: Trace


@dataclass(frozen=True)
class ScoringScheme:
    """
    Linear scoring scheme for global alignment.

    Attributes:
        match_score: Reward for aligning two equal characters
        mismatch_score: Score for aligning two different characters
        gap_score: Score for each gap position in either sequence (usually negative)
    """
    match_score: int = 2
    mismatch_score: int = -1
    gap_score: int = -2

    def __post_init__(self):
        """Validate that all scores are integers."""
        for field_name, value in self.__dict__.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Score '{field_name}' must be an integer, got: {value!r}")

    def substitution(self, a, b):
        """Score for aligning character a against character b."""
        return self.match_score if a == b else self.mismatch_score


@dataclass(frozen=True)
class DisplayFormat:
    """Format codes for matrix and alignment rendering."""
    match: str = '|'        # Equal characters in an alignment column
    mismatch: str = ' '     # Substitution or gap column
    cell_width: int = 3     # Width of each right-aligned matrix value

    def __post_init__(self):
        """Validate marker codes and cell width."""
        for field_name in ('match', 'mismatch'):
            value = getattr(self, field_name)
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(f"Display code '{field_name}' must be a single character, got: {value!r}")
        if isinstance(self.cell_width, bool) or not isinstance(self.cell_width, int) or self.cell_width < 1:
            raise ValueError(f"cell_width must be a positive integer, got: {self.cell_width!r}")


@dataclass(frozen=True)
class AlignmentResult:
    """Result of a global alignment run.

    Fields:
        subject: First input sequence
        query: Second input sequence
        scheme: Scoring scheme used to build the matrix
        matrix: Score matrix, (len(subject)+1) rows by (len(query)+1) columns
        aligned_subject: Subject with gap characters inserted
        aligned_query: Query with gap characters inserted
        score: Total alignment score (bottom-right cell of the matrix)
        path: Traceback directions in alignment order (start to end)
        gap_char: Character used for gaps in the aligned strings
    """
    subject: str
    query: str
    scheme: ScoringScheme
    matrix: tuple
    aligned_subject: str
    aligned_query: str
    score: int
    path: tuple = ()
    gap_char: str = GAP_CHAR

    @property
    def match_score(self):
        return self.scheme.match_score

    @property
    def mismatch_score(self):
        return self.scheme.mismatch_score

    @property
    def gap_score(self):
        return self.scheme.gap_score

    @property
    def total_score(self):
        return self.score

    @property
    def length(self):
        """Number of alignment columns."""
        return len(self.aligned_subject)

    @property
    def matches(self):
        return sum(1 for a, b in zip(self.aligned_subject, self.aligned_query)
                   if a == b and a != self.gap_char)

    @property
    def gaps(self):
        return self.path.count(Trace.UP) + self.path.count(Trace.LEFT)

    @property
    def mismatches(self):
        return self.path.count(Trace.DIAGONAL) - self.matches

    @property
    def identity(self):
        """Fraction of alignment columns that are matches (0.0 for an empty alignment)."""
        if self.length == 0:
            return 0.0
        return self.matches / self.length

    def cell(self, x, y):
        """Matrix cell for the first x subject and first y query characters."""
        return self.matrix[x][y]


# Default scoring scheme (match=+2, mismatch=-1, gap=-2)
DEFAULT_SCORING_SCHEME = ScoringScheme()

# Unit cost scheme: alignment score is the negated edit distance
UNIT_COST_SCHEME = ScoringScheme(match_score=0, mismatch_score=-1, gap_score=-1)

# Default display format
DEFAULT_DISPLAY_FORMAT = DisplayFormat()


def _initialize_score_matrix(subject_length, query_length, gap_score):
    """
    Allocate the score matrix and fill its boundary row and column.

    Column 0 represents a subject prefix aligned against nothing (all UP),
    row 0 a query prefix aligned against nothing (all LEFT). Interior cells
    are left as None until filled.

    Returns:
        list: (subject_length+1) rows of (query_length+1) cells
    """
    matrix = [[None] * (query_length + 1) for _ in range(subject_length + 1)]
    for x in range(subject_length + 1):
        matrix[x][0] = Cell(gap_score * x, Trace.UP)
    for y in range(query_length + 1):
        matrix[0][y] = Cell(gap_score * y, Trace.LEFT)
    return matrix


def _calculate_cell(matrix, subject, query, x, y, scheme):
    """
    Best score for cell (x, y) from its three filled neighbours.

    Candidates are compared in the order UP, LEFT, DIAGONAL and the first
    one reaching the maximum wins.
    """
    up = matrix[x - 1][y].score + scheme.gap_score
    left = matrix[x][y - 1].score + scheme.gap_score
    diagonal = matrix[x - 1][y - 1].score + scheme.substitution(subject[x - 1], query[y - 1])

    score = max(up, left, diagonal)
    if score == up:
        return Cell(score, Trace.UP)
    if score == left:
        return Cell(score, Trace.LEFT)
    return Cell(score, Trace.DIAGONAL)


def _fill_score_matrix(matrix, subject, query, scheme):
    """Fill interior cells row by row; each depends only on cells already filled."""
    for x in range(1, len(subject) + 1):
        row = matrix[x]
        for y in range(1, len(query) + 1):
            row[y] = _calculate_cell(matrix, subject, query, x, y, scheme)


def _trace_best_alignment(matrix, subject, query, gap_char):
    """
    Walk back from the bottom-right cell to the origin.

    Columns are collected end to start and reversed once at the end.

    Returns:
        tuple: (aligned_subject, aligned_query, path) where path lists the
               traceback directions in alignment order
    """
    x = len(subject)
    y = len(query)
    subject_chars = []
    query_chars = []
    path = []

    while x > 0 or y > 0:
        trace = matrix[x][y].trace
        if trace is Trace.UP:
            x -= 1
            subject_chars.append(subject[x])
            query_chars.append(gap_char)
        elif trace is Trace.LEFT:
            y -= 1
            subject_chars.append(gap_char)
            query_chars.append(query[y])
        else:
            x -= 1
            y -= 1
            subject_chars.append(subject[x])
            query_chars.append(query[y])
        path.append(trace)

    subject_chars.reverse()
    query_chars.reverse()
    path.reverse()
    return ''.join(subject_chars), ''.join(query_chars), tuple(path)


def align(subject, query, scheme=None, gap_char=GAP_CHAR):
    """
    Compute an optimal global alignment of two sequences.

    Builds the complete (m+1) x (n+1) score matrix with the Needleman-Wunsch
    recurrence, then traces back a single optimal path. Empty sequences are
    valid: the alignment is all gaps against the other sequence, or empty
    when both are empty.

    Args:
        subject (str): First sequence
        query (str): Second sequence
        scheme (ScoringScheme, optional): Scores to use. Defaults to DEFAULT_SCORING_SCHEME.
        gap_char (str): Single character used for gaps in the aligned strings

    Returns:
        AlignmentResult: Immutable result holding the matrix, aligned strings and score

    Raises:
        ValueError: If gap_char is not a single character or occurs in either sequence

    Example:
        >>> result = align("CACGTGATCAA", "AGCATCGGTTG")
        >>> print(result.aligned_subject)
        --CA-CGTGATCAA
        >>> print(result.score)
        -2
    """
    if scheme is None:
        scheme = DEFAULT_SCORING_SCHEME

    if not isinstance(gap_char, str) or len(gap_char) != 1:
        raise ValueError(f"Gap character must be a single character, got: {gap_char!r}")
    if gap_char in subject or gap_char in query:
        raise ValueError(f"Input sequences must not contain the gap character {gap_char!r}")

    logger.debug("Aligning %d x %d sequences with %s", len(subject), len(query), scheme)

    matrix = _initialize_score_matrix(len(subject), len(query), scheme.gap_score)
    _fill_score_matrix(matrix, subject, query, scheme)
    aligned_subject, aligned_query, path = _trace_best_alignment(matrix, subject, query, gap_char)

    logger.debug("Traceback took %d steps (%d diagonal, %d gaps)",
                 len(path), path.count(Trace.DIAGONAL), len(path) - path.count(Trace.DIAGONAL))

    return AlignmentResult(
        subject=subject,
        query=query,
        scheme=scheme,
        matrix=tuple(tuple(row) for row in matrix),
        aligned_subject=aligned_subject,
        aligned_query=aligned_query,
        score=matrix[len(subject)][len(query)].score,
        path=path,
        gap_char=gap_char
    )


def score_alignment(aligned_subject, aligned_query, scheme=None, gap_char=GAP_CHAR):
    """
    Score an aligned pair column by column.

    Each residue pair contributes the match or mismatch score and each gap
    column contributes the gap score. For any alignment produced by align()
    this equals the matrix score.

    Args:
        aligned_subject (str): First aligned sequence with gap characters
        aligned_query (str): Second aligned sequence with gap characters
        scheme (ScoringScheme, optional): Defaults to DEFAULT_SCORING_SCHEME
        gap_char (str): Gap character used in the aligned strings

    Returns:
        int: Total alignment score

    Raises:
        ValueError: If the strings differ in length or share a gap column
    """
    if scheme is None:
        scheme = DEFAULT_SCORING_SCHEME

    if len(aligned_subject) != len(aligned_query):
        raise ValueError(f"Aligned sequences must have same length: "
                         f"subject={len(aligned_subject)}, query={len(aligned_query)}")

    total = 0
    for i, (a, b) in enumerate(zip(aligned_subject, aligned_query)):
        if a == gap_char and b == gap_char:
            raise ValueError(f"Column {i} is a gap in both sequences")
        if a == gap_char or b == gap_char:
            total += scheme.gap_score
        else:
            total += scheme.substitution(a, b)
    return total


def edit_distance(subject, query):
    """
    Global edit (Levenshtein) distance between two sequences.

    Equals the negated alignment score under UNIT_COST_SCHEME.
    """
    if len(subject) == 0 or len(query) == 0:
        # Safety check: distance to an empty sequence is the other length
        return max(len(subject), len(query))
    result = edlib.align(subject, query, mode="NW", task="distance")
    return result['editDistance']


def format_score_matrix(result, display_format=None):
    """
    Render the score matrix as a text grid.

    The header row lists the query characters and the header column the
    subject characters; row and column 0 are the empty-prefix boundary.
    """
    if display_format is None:
        display_format = DEFAULT_DISPLAY_FORMAT
    width = display_format.cell_width

    header = ' ' * (width + 7) + ''.join(f"{c:^{width + 2}}" for c in result.query)
    lines = [header]
    for x, row in enumerate(result.matrix):
        label = ' ' if x == 0 else result.subject[x - 1]
        cells = ''.join(f" {cell.score:>{width}} " for cell in row)
        lines.append(f"  {label}  {cells}")
    return '\n'.join(lines)


def format_alignment(result, display_format=None):
    """
    Render the aligned pair with a marker line between them.

    Every column is marked, the last one included.
    """
    if display_format is None:
        display_format = DEFAULT_DISPLAY_FORMAT

    markers = ''.join(
        display_format.match if a == b else display_format.mismatch
        for a, b in zip(result.aligned_subject, result.aligned_query)
    )
    return '\n'.join([result.aligned_subject, markers, result.aligned_query])


def format_report(result, display_format=None, show_matrix=True):
    """Full text report: strands, scoring scheme, matrix, alignment and score."""
    sections = [
        f"STRAND #1: {result.subject}\n"
        f"STRAND #2: {result.query}",
        "SCORING SCHEME:\n"
        f"- MATCH     = {result.match_score}\n"
        f"- MISMATCH  = {result.mismatch_score}\n"
        f"- INDEL/GAP = {result.gap_score}",
    ]
    if show_matrix:
        sections.append("MATRIX:\n" + format_score_matrix(result, display_format))
    sections.append("ALIGNMENT:\n" + format_alignment(result, display_format))
    sections.append(f"SCORE: {result.score}")
    return '\n\n'.join(sections)
