"""Word-level alignment between two versions of a chapter.

Responsibilities:
- Compute a longest common subsequence over whitespace-preserving tokens.
- Classify every token as `same`, `added`, or `removed` for unified and
  side-by-side rendering.
- Provide a line-level unified diff carrying per-line word diffs.
"""

from __future__ import annotations

from array import array

from ..models.datatypes import (
    ADDED,
    REMOVED,
    SAME,
    AlignedDiff,
    DiffEntry,
    LineDiffEntry,
)
from .tokens import tokenize


class Aligner:
    """Align two texts token by token using an LCS-anchored forward merge."""

    def align(self, old_text: str, new_text: str) -> AlignedDiff:
        """Split the combined diff into parallel old/new streams.

        Args:
            old_text: Earlier version of the text.
            new_text: Later version of the text.

        Returns:
            Old stream holding `same`/`removed` entries and new stream holding
            `same`/`added` entries, each in original token order.
        """

        old_stream: list[DiffEntry] = []
        new_stream: list[DiffEntry] = []
        for entry in self.diff(old_text, new_text):
            if entry.classification == SAME:
                old_stream.append(entry)
                new_stream.append(entry)
            elif entry.classification == REMOVED:
                old_stream.append(entry)
            else:
                new_stream.append(entry)
        return AlignedDiff(old_stream=tuple(old_stream), new_stream=tuple(new_stream))

    def diff(self, old_text: str, new_text: str) -> list[DiffEntry]:
        """Return the interleaved word diff of two texts.

        Every old token appears exactly once as `same` or `removed` and every
        new token exactly once as `same` or `added`, both in original order.
        A replacement is emitted as a `removed` entry followed by an `added`
        entry.
        """

        old_tokens = tokenize(old_text)
        new_tokens = tokenize(new_text)
        common = self.longest_common_subsequence(old_tokens, new_tokens)

        entries: list[DiffEntry] = []
        old_index = 0
        new_index = 0
        common_index = 0
        old_length = len(old_tokens)
        new_length = len(new_tokens)

        while old_index < old_length or new_index < new_length:
            if old_index >= old_length:
                entries.append(DiffEntry(new_tokens[new_index], ADDED))
                new_index += 1
                continue
            if new_index >= new_length:
                entries.append(DiffEntry(old_tokens[old_index], REMOVED))
                old_index += 1
                continue

            old_token = old_tokens[old_index]
            new_token = new_tokens[new_index]

            if old_token == new_token:
                entries.append(DiffEntry(old_token, SAME))
                if common_index < len(common) and old_token == common[common_index]:
                    common_index += 1
                old_index += 1
                new_index += 1
                continue

            # Differing tokens are settled by the reappearance lookahead, even when
            # one of them is the current common-subsequence token.
            step = self._resolve_mismatch(old_tokens, new_tokens, old_index, new_index)
            if step == ADDED:
                entries.append(DiffEntry(new_token, ADDED))
                new_index += 1
            elif step == REMOVED:
                entries.append(DiffEntry(old_token, REMOVED))
                old_index += 1
            else:
                entries.append(DiffEntry(old_token, REMOVED))
                entries.append(DiffEntry(new_token, ADDED))
                old_index += 1
                new_index += 1
        return entries

    def diff_lines(self, old_text: str, new_text: str) -> list[LineDiffEntry]:
        """Return a unified line diff with word diffs for changed line pairs.

        Lines are paired positionally. Identical pairs are `same`; a differing
        pair yields the old line as `removed` and the new line as `added`,
        both carrying the word diff of the pair. Unpaired trailing lines are
        diffed against an empty line.
        """

        old_lines = old_text.split("\n")
        new_lines = new_text.split("\n")
        entries: list[LineDiffEntry] = []
        old_index = 0
        new_index = 0

        while old_index < len(old_lines) or new_index < len(new_lines):
            if old_index >= len(old_lines):
                line = new_lines[new_index]
                entries.append(LineDiffEntry(line, ADDED, tuple(self.diff("", line))))
                new_index += 1
            elif new_index >= len(new_lines):
                line = old_lines[old_index]
                entries.append(LineDiffEntry(line, REMOVED, tuple(self.diff(line, ""))))
                old_index += 1
            elif old_lines[old_index] == new_lines[new_index]:
                entries.append(LineDiffEntry(old_lines[old_index], SAME))
                old_index += 1
                new_index += 1
            else:
                words = tuple(self.diff(old_lines[old_index], new_lines[new_index]))
                entries.append(LineDiffEntry(old_lines[old_index], REMOVED, words))
                entries.append(LineDiffEntry(new_lines[new_index], ADDED, words))
                old_index += 1
                new_index += 1
        return entries

    def longest_common_subsequence(
        self,
        old_tokens: list[str],
        new_tokens: list[str],
    ) -> list[str]:
        """Return one longest common subsequence of two token lists.

        On a mismatch the backtrack steps toward the old side whenever
        `dp[i - 1][j] >= dp[i][j - 1]`, which fixes the choice between
        equal-length alignments.
        """

        table = self._build_table(old_tokens, new_tokens)
        common: list[str] = []
        i = len(old_tokens)
        j = len(new_tokens)
        while i > 0 and j > 0:
            if old_tokens[i - 1] == new_tokens[j - 1]:
                common.append(old_tokens[i - 1])
                i -= 1
                j -= 1
            elif table[i - 1][j] >= table[i][j - 1]:
                i -= 1
            else:
                j -= 1
        common.reverse()
        return common

    def _build_table(self, old_tokens: list[str], new_tokens: list[str]) -> list[array]:
        """Build the `(m + 1) x (n + 1)` LCS length table."""

        width = len(new_tokens) + 1
        table = [array("I", [0]) * width for _ in range(len(old_tokens) + 1)]
        for i in range(1, len(old_tokens) + 1):
            row = table[i]
            previous = table[i - 1]
            old_token = old_tokens[i - 1]
            for j in range(1, width):
                if old_token == new_tokens[j - 1]:
                    row[j] = previous[j - 1] + 1
                else:
                    row[j] = max(previous[j], row[j - 1])
        return table

    def _resolve_mismatch(
        self,
        old_tokens: list[str],
        new_tokens: list[str],
        old_index: int,
        new_index: int,
    ) -> str | None:
        """Decide whether a mismatch is an insertion, a deletion, or a replacement.

        Returns `added` when the old token reappears in the rest of the new
        tokens strictly sooner than the new token reappears in the rest of the
        old tokens (or the new token never does), `removed` when only the new
        token reappears or it reappears at the same or a smaller offset, and
        `None` when neither token reappears.
        """

        old_in_new = self._find_offset(new_tokens, old_tokens[old_index], new_index)
        new_in_old = self._find_offset(old_tokens, new_tokens[new_index], old_index)
        if old_in_new is not None and (new_in_old is None or old_in_new < new_in_old):
            return ADDED
        if new_in_old is not None:
            return REMOVED
        return None

    @staticmethod
    def _find_offset(tokens: list[str], token: str, start: int) -> int | None:
        """Return the offset of `token` in `tokens[start:]`, or `None`."""

        try:
            return tokens.index(token, start) - start
        except ValueError:
            return None


def align(old_text: str, new_text: str) -> AlignedDiff:
    """Align two texts with a default `Aligner`."""

    return Aligner().align(old_text, new_text)
