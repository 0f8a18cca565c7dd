"""Position-based scoring of a spoken transcript against a story."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Sequence, Tuple

from .edit_distance import similarity_ratio
from .normalizer import tokenize

# Pronunciation variants and misheard homophones usually land above this ratio.
MATCH_THRESHOLD = 0.70


@dataclass(frozen=True)
class Mismatch:
	"""A reference word the reader did not produce closely enough.

	Attributes:
		position: Zero-based word index in the aligned sequences
		expected: Reference token ("" when the transcript ran longer)
		spoken: Transcript token ("" when the transcript ran short)
	"""
	position: int
	expected: str
	spoken: str

	def to_dict(self) -> Dict[str, Any]:
		return {"position": self.position, "expected": self.expected, "spoken": self.spoken}


@dataclass(frozen=True)
class AlignmentResult:
	"""Outcome of scoring one reading.

	``accuracy`` is kept unrounded; use :meth:`rounded_accuracy` for storage
	and transport.
	"""
	total_reference_tokens: int
	correct_count: int
	mismatch_count: int
	accuracy: float
	mismatches: Tuple[Mismatch, ...] = field(default_factory=tuple)

	def rounded_accuracy(self) -> float:
		# Ties round up, e.g. 3.125 -> 3.13
		return float(Decimal(self.accuracy).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

	def to_payload(self) -> Dict[str, Any]:
		return {
			"accuracy": self.rounded_accuracy(),
			"correct_words": self.correct_count,
			"total_words": self.total_reference_tokens,
			"mistakes": self.mismatch_count,
			"mistakes_details": [m.to_dict() for m in self.mismatches],
		}


def tokens_match(expected: str, spoken: str, threshold: float = MATCH_THRESHOLD) -> bool:
	if expected == spoken:
		return True
	return similarity_ratio(expected, spoken) >= threshold


def score_tokens(
	reference: Sequence[str],
	hypothesis: Sequence[str],
	threshold: float = MATCH_THRESHOLD,
) -> AlignmentResult:
	"""Compare ``reference`` and ``hypothesis`` index by index.

	Every position up to the longer sequence is either correct or a mismatch,
	so ``correct_count + mismatch_count == max(len(reference), len(hypothesis))``.
	A skipped or inserted word shifts all following words out of alignment.

	Args:
		reference: Tokens of the story text
		hypothesis: Tokens of the spoken transcript
		threshold: Minimum similarity ratio accepted as a correct reading

	Returns:
		AlignmentResult with mismatches in ascending position order
	"""
	max_len = max(len(reference), len(hypothesis))
	correct = 0
	mismatches: List[Mismatch] = []

	for i in range(max_len):
		ref_tok = reference[i] if i < len(reference) else ""
		hyp_tok = hypothesis[i] if i < len(hypothesis) else ""
		if tokens_match(ref_tok, hyp_tok, threshold):
			correct += 1
		else:
			mismatches.append(Mismatch(position=i, expected=ref_tok, spoken=hyp_tok))

	total = len(reference)
	accuracy = (correct / total) * 100 if total > 0 else 0.0
	return AlignmentResult(
		total_reference_tokens=total,
		correct_count=correct,
		mismatch_count=len(mismatches),
		accuracy=accuracy,
		mismatches=tuple(mismatches),
	)


def score_reading(reference_text: str, spoken_text: str) -> AlignmentResult:
	"""Normalize both texts and score the transcript against the story."""
	return score_tokens(tokenize(reference_text), tokenize(spoken_text))
