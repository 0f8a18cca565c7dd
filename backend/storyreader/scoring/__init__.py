"""Reading-assessment scoring: normalization, fuzzy matching and alignment."""
from .alignment import MATCH_THRESHOLD, AlignmentResult, Mismatch, score_reading, score_tokens
from .edit_distance import levenshtein_distance, similarity_ratio
from .normalizer import normalize_text, tokenize

__all__ = [
	"MATCH_THRESHOLD",
	"AlignmentResult",
	"Mismatch",
	"score_reading",
	"score_tokens",
	"levenshtein_distance",
	"similarity_ratio",
	"normalize_text",
	"tokenize",
]
