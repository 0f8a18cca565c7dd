from __future__ import annotations
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import ReadingSession, MistakeLog
from .scoring import AlignmentResult

logger = logging.getLogger(__name__)


def record_session(db: Session, user_id: int, story_id: int, result: AlignmentResult) -> ReadingSession:
	"""Persist a scored reading and its mistakes in a single transaction.

	The session id comes from the database's auto-increment key. Mistake rows
	are written in ascending position order. On failure nothing is kept.
	"""
	row = ReadingSession(
		user_id=user_id,
		story_id=story_id,
		accuracy=result.rounded_accuracy(),
		correct_words=result.correct_count,
		total_words=result.total_reference_tokens,
		mistakes=result.mismatch_count,
	)
	row.mistake_log = [
		MistakeLog(expected_word=m.expected, spoken_word=m.spoken, position=m.position)
		for m in result.mismatches
	]
	try:
		db.add(row)
		db.commit()
	except SQLAlchemyError:
		db.rollback()
		raise
	db.refresh(row)
	logger.info(
		"Recorded reading session %s (user=%s story=%s accuracy=%.2f mistakes=%d)",
		row.id, user_id, story_id, row.accuracy, row.mistakes,
	)
	return row
