import pytest
from sqlalchemy.exc import IntegrityError

from storyreader.models import MistakeLog, ReadingSession
from storyreader.recorder import record_session
from storyreader.scoring import AlignmentResult, Mismatch, score_reading, score_tokens


def test_record_session_persists_rows_in_position_order(db_session, student, story):
	result = score_reading("one two three four", "one too tree fore five")
	row = record_session(db_session, student.id, story.id, result)

	assert row.id is not None
	assert row.user_id == student.id
	assert row.story_id == story.id
	assert row.total_words == result.total_reference_tokens
	assert row.correct_words == result.correct_count
	assert row.mistakes == result.mismatch_count
	assert row.accuracy == result.rounded_accuracy()

	logged = db_session.query(MistakeLog).filter(MistakeLog.session_id == row.id).order_by(MistakeLog.id).all()
	assert [(m.position, m.expected_word, m.spoken_word) for m in logged] == [
		(m.position, m.expected, m.spoken) for m in result.mismatches
	]
	assert [m.position for m in logged] == sorted(m.position for m in logged)


def test_record_session_assigns_new_ids(db_session, student, story):
	result = score_reading("the cat sat", "the cat sat")
	first = record_session(db_session, student.id, story.id, result)
	second = record_session(db_session, student.id, story.id, result)
	assert first.id != second.id


def test_record_session_rounds_accuracy(db_session, student, story):
	row = record_session(db_session, student.id, story.id, score_reading("the cat sat", "the car sat"))
	assert row.accuracy == 66.67


def test_record_session_stores_ties_rounded_up(db_session, student, story):
	reference = [f"w{i}" for i in range(32)]
	result = score_tokens(reference, ["w0"] + ["zzzzzzzz"] * 31)
	row = record_session(db_session, student.id, story.id, result)
	db_session.expire_all()
	assert db_session.get(ReadingSession, row.id).accuracy == 3.13


def test_record_session_rolls_back_on_failure(db_session, student, story):
	broken = AlignmentResult(
		total_reference_tokens=1,
		correct_count=0,
		mismatch_count=1,
		accuracy=0.0,
		mismatches=(Mismatch(position=None, expected="hen", spoken="pen"),),
	)
	with pytest.raises(IntegrityError):
		record_session(db_session, student.id, story.id, broken)
	assert db_session.query(ReadingSession).count() == 0
	assert db_session.query(MistakeLog).count() == 0
