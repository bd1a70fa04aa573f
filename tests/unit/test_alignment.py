"""Unit tests for LCS-anchored word-level alignment."""

from __future__ import annotations

import pytest

from manuscript.models.datatypes import ADDED, REMOVED, SAME, DiffEntry
from manuscript.text.alignment import Aligner, align


def _pairs(entries: tuple[DiffEntry, ...] | list[DiffEntry]) -> list[tuple[str, str]]:
    """Flatten diff entries into `(text, classification)` pairs."""

    return [(entry.text, entry.classification) for entry in entries]


def test_align_marks_replaced_word_on_each_side() -> None:
    aligned = align("The cat sat.", "The dog sat.")

    assert _pairs(aligned.old_stream) == [
        ("The", SAME),
        (" ", SAME),
        ("cat", REMOVED),
        (" ", SAME),
        ("sat.", SAME),
    ]
    assert _pairs(aligned.new_stream) == [
        ("The", SAME),
        (" ", SAME),
        ("dog", ADDED),
        (" ", SAME),
        ("sat.", SAME),
    ]


def test_diff_emits_replacement_as_removed_then_added() -> None:
    entries = Aligner().diff("The cat sat.", "The dog sat.")

    assert _pairs(entries) == [
        ("The", SAME),
        (" ", SAME),
        ("cat", REMOVED),
        ("dog", ADDED),
        (" ", SAME),
        ("sat.", SAME),
    ]


def test_align_identical_texts_are_all_same() -> None:
    text = "Alpha beta.\n\nGamma  delta."

    aligned = align(text, text)

    assert not aligned.has_changes()
    assert all(entry.classification == SAME for entry in aligned.old_stream)
    assert aligned.old_stream == aligned.new_stream


def test_align_from_empty_marks_everything_added() -> None:
    aligned = align("", "one two")

    assert aligned.old_stream == ()
    assert _pairs(aligned.new_stream) == [("one", ADDED), (" ", ADDED), ("two", ADDED)]


def test_align_to_empty_marks_everything_removed() -> None:
    aligned = align("one two", "")

    assert aligned.new_stream == ()
    assert _pairs(aligned.old_stream) == [
        ("one", REMOVED),
        (" ", REMOVED),
        ("two", REMOVED),
    ]


def test_align_two_empty_strings_yields_empty_streams() -> None:
    aligned = align("", "")

    assert aligned.old_stream == ()
    assert aligned.new_stream == ()


def test_align_pure_insertion_keeps_old_side_unchanged() -> None:
    aligned = align("a c", "a b c")

    assert all(entry.classification == SAME for entry in aligned.old_stream)
    assert _pairs(aligned.new_stream) == [
        ("a", SAME),
        (" ", SAME),
        ("b", ADDED),
        (" ", ADDED),
        ("c", SAME),
    ]


def test_align_pure_deletion_keeps_new_side_unchanged() -> None:
    aligned = align("a b c", "a c")

    assert all(entry.classification == SAME for entry in aligned.new_stream)
    assert _pairs(aligned.old_stream) == [
        ("a", SAME),
        (" ", SAME),
        ("b", REMOVED),
        (" ", REMOVED),
        ("c", SAME),
    ]


def test_align_treats_changed_whitespace_run_as_replacement() -> None:
    aligned = align("a b", "a  b")

    assert _pairs(aligned.old_stream) == [("a", SAME), (" ", REMOVED), ("b", SAME)]
    assert _pairs(aligned.new_stream) == [("a", SAME), ("  ", ADDED), ("b", SAME)]


@pytest.mark.parametrize(
    ("old_text", "new_text"),
    [
        ("The quick brown fox", "The slow brown dog jumps"),
        ("x y", "y x"),
        ("one\n\ntwo three", "two\nthree one"),
        ("  padded  ", "padded"),
        ("a a a b", "b a a a"),
        ("It was the best of times.", "It was the worst of times, it was."),
    ],
)
def test_align_streams_rebuild_both_inputs(old_text: str, new_text: str) -> None:
    """Same+removed should rebuild the old text and same+added the new text."""

    aligned = align(old_text, new_text)

    assert aligned.old_text() == old_text
    assert aligned.new_text() == new_text
    assert {entry.classification for entry in aligned.old_stream} <= {SAME, REMOVED}
    assert {entry.classification for entry in aligned.new_stream} <= {SAME, ADDED}


def test_align_same_entries_correspond_across_streams() -> None:
    aligned = align("The quick brown fox", "The slow brown dog")

    old_same = [entry.text for entry in aligned.old_stream if entry.classification == SAME]
    new_same = [entry.text for entry in aligned.new_stream if entry.classification == SAME]

    assert old_same == new_same


@pytest.mark.parametrize(
    ("old_text", "new_text", "expected"),
    [
        (
            "a b",
            "b a",
            [("a", REMOVED), (" ", REMOVED), ("b", SAME), (" ", ADDED), ("a", ADDED)],
        ),
        (
            "x y",
            "y x",
            [("x", REMOVED), (" ", REMOVED), ("y", SAME), (" ", ADDED), ("x", ADDED)],
        ),
        (
            "a b",
            "b b",
            [("a", REMOVED), (" ", REMOVED), ("b", SAME), (" ", ADDED), ("b", ADDED)],
        ),
        (
            "a a a b",
            "b a a a",
            [
                ("b", ADDED),
                ("a", REMOVED),
                (" ", SAME),
                ("a", SAME),
                (" ", SAME),
                ("a", SAME),
                (" ", SAME),
                ("b", REMOVED),
                ("a", ADDED),
            ],
        ),
    ],
)
def test_diff_settles_mismatches_by_nearest_reappearance(
    old_text: str, new_text: str, expected: list[tuple[str, str]]
) -> None:
    """Reordered and repeated tokens should follow the reappearance lookahead exactly."""

    assert _pairs(Aligner().diff(old_text, new_text)) == expected


def test_align_splits_reordered_words_into_streams() -> None:
    aligned = align("a b", "b a")

    assert _pairs(aligned.old_stream) == [("a", REMOVED), (" ", REMOVED), ("b", SAME)]
    assert _pairs(aligned.new_stream) == [("b", SAME), (" ", ADDED), ("a", ADDED)]


def test_diff_uses_lookahead_when_old_token_is_the_common_token() -> None:
    """A common-subsequence token on the old side does not force the new token in."""

    # Common subsequence is ["a"]; "a" reappears in the new remainder at offset 2
    # while "c" never reappears in the old remainder, so "c" is an insertion.
    assert _pairs(Aligner().diff("a", "c a")) == [("c", ADDED), (" ", ADDED), ("a", SAME)]
    # "b" reappears in the old remainder at the same offset as "a" in the new
    # remainder, and ties resolve as deletions.
    assert _pairs(Aligner().diff("a b", "b a")[:2]) == [("a", REMOVED), (" ", REMOVED)]


def test_longest_common_subsequence_prefers_old_side_on_ties() -> None:
    """Backtracking should step toward the old side when both directions tie."""

    aligner = Aligner()

    assert aligner.longest_common_subsequence(["a", "b"], ["b", "a"]) == ["a"]
    assert aligner.longest_common_subsequence(["x", "a", "b"], ["a", "x", "b"]) == ["x", "b"]
    assert aligner.longest_common_subsequence([], ["a"]) == []


def test_resolve_mismatch_prefers_nearest_reappearance() -> None:
    """Lookahead should pick insertion or deletion by the smaller reappearance offset."""

    aligner = Aligner()

    assert aligner._resolve_mismatch(["a", "b"], ["x", "a"], 0, 0) == ADDED
    assert aligner._resolve_mismatch(["x", "a"], ["a", "y"], 0, 0) == REMOVED
    assert aligner._resolve_mismatch(["a", "x", "y", "b"], ["b", "a"], 0, 0) == ADDED
    assert aligner._resolve_mismatch(["a", "b"], ["b", "a"], 0, 0) == REMOVED
    assert aligner._resolve_mismatch(["a"], ["b"], 0, 0) is None


def test_diff_lines_pairs_changed_lines_with_word_diffs() -> None:
    entries = Aligner().diff_lines(
        "same line\nold words here\nextra",
        "same line\nnew words here",
    )

    assert [(entry.text, entry.classification) for entry in entries] == [
        ("same line", SAME),
        ("old words here", REMOVED),
        ("new words here", ADDED),
        ("extra", REMOVED),
    ]
    assert entries[0].words == ()
    assert _pairs(entries[1].words[:2]) == [("old", REMOVED), ("new", ADDED)]
    assert entries[1].words == entries[2].words
    assert _pairs(entries[3].words) == [("extra", REMOVED)]


def test_diff_lines_marks_trailing_new_lines_added() -> None:
    entries = Aligner().diff_lines("first", "first\nsecond")

    assert [(entry.text, entry.classification) for entry in entries] == [
        ("first", SAME),
        ("second", ADDED),
    ]
    assert _pairs(entries[1].words) == [("second", ADDED)]
