"""Character-level edit distance used for fuzzy word matching."""
from __future__ import annotations

from typing import List


def levenshtein_distance(a: str, b: str) -> int:
	"""Minimum number of single-character edits turning ``a`` into ``b``.

	Classic dynamic-programming table of size (len(a)+1) x (len(b)+1);
	insertions, deletions and substitutions each cost 1.
	"""
	n, m = len(a), len(b)
	dp: List[List[int]] = [[0] * (m + 1) for _ in range(n + 1)]

	for i in range(1, n + 1):
		dp[i][0] = i
	for j in range(1, m + 1):
		dp[0][j] = j

	for i in range(1, n + 1):
		for j in range(1, m + 1):
			if a[i - 1] == b[j - 1]:
				dp[i][j] = dp[i - 1][j - 1]
			else:
				dp[i][j] = min(
					dp[i - 1][j - 1] + 1,  # substitution
					dp[i][j - 1] + 1,  # insertion
					dp[i - 1][j] + 1,  # deletion
				)
	return dp[n][m]


def similarity_ratio(a: str, b: str) -> float:
	"""Return ``1 - distance / max(len(a), len(b))`` in the range [0, 1].

	Two empty tokens are identical, so the ratio is 1.0 rather than 0/0.
	"""
	longest = max(len(a), len(b))
	if longest == 0:
		return 1.0
	return 1 - levenshtein_distance(a, b) / longest
