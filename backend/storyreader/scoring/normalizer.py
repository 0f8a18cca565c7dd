"""Text normalization for comparing a story against a spoken transcript."""
from __future__ import annotations

import re
from typing import List

# Only these marks are stripped; hyphens and other symbols stay part of a word.
STRIPPED_PUNCTUATION = ".,!?;:\"'()"

_PUNCTUATION_RE = re.compile("[" + re.escape(STRIPPED_PUNCTUATION) + "]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
	"""Lower-case, drop punctuation and collapse whitespace.

	Example: "Not I,  said the Dog." -> "not i said the dog"
	"""
	text = (text or "").lower()
	text = _PUNCTUATION_RE.sub("", text)
	text = _WHITESPACE_RE.sub(" ", text)
	return text.strip()


def tokenize(text: str) -> List[str]:
	"""Split normalized text into word tokens.

	Splits on a single space rather than ``str.split()`` so an empty or
	whitespace-only input yields ``[""]``, one empty token. The scorer relies
	on that to count an empty story as one reference word.
	"""
	return normalize_text(text).split(" ")
