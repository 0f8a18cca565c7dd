from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import ReadingSession, Story
from ..recorder import record_session
from ..scoring import score_reading
from .auth import User, get_current_user


router = APIRouter(prefix="/api/sessions", tags=["reading_sessions"])

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
	story_id: int
	spoken_text: Optional[str] = ""


class MistakeDetail(BaseModel):
	position: int
	expected: str
	spoken: str


class AnalyzeResponse(BaseModel):
	session_id: int
	accuracy: float
	correct_words: int
	total_words: int
	mistakes: int
	mistakes_details: List[MistakeDetail]


def _session_dict(row: ReadingSession) -> Dict[str, Any]:
	return {
		"id": row.id,
		"user_id": row.user_id,
		"story_id": row.story_id,
		"accuracy": row.accuracy,
		"correct_words": row.correct_words,
		"total_words": row.total_words,
		"mistakes": row.mistakes,
		"created_at": row.created_at,
	}


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_reading(req: AnalyzeRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	story = db.get(Story, req.story_id)
	if not story:
		raise HTTPException(status_code=404, detail="Story not found")
	result = score_reading(story.text, req.spoken_text or "")
	row = record_session(db, user.id, story.id, result)
	return {"session_id": row.id, **result.to_payload()}


@router.get("")
async def list_sessions(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = (
		db.query(ReadingSession, Story.title)
		.join(Story, ReadingSession.story_id == Story.id)
		.filter(ReadingSession.user_id == user.id)
		.order_by(ReadingSession.created_at.desc(), ReadingSession.id.desc())
		.all()
	)
	return [{**_session_dict(row), "story_title": title} for row, title in rows]


@router.get("/stats")
async def get_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	total, average, correct, mistakes = (
		db.query(
			func.count(ReadingSession.id),
			func.avg(ReadingSession.accuracy),
			func.coalesce(func.sum(ReadingSession.correct_words), 0),
			func.coalesce(func.sum(ReadingSession.mistakes), 0),
		)
		.filter(ReadingSession.user_id == user.id)
		.one()
	)
	return {
		"total_sessions": total,
		"average_accuracy": round(average, 2) if average is not None else None,
		"total_correct_words": correct,
		"total_mistakes": mistakes,
	}


@router.get("/{session_id}")
async def get_session_details(session_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	row = (
		db.query(ReadingSession)
		.filter(ReadingSession.id == session_id, ReadingSession.user_id == user.id)
		.first()
	)
	if not row:
		raise HTTPException(status_code=404, detail="Session not found")
	return {
		**_session_dict(row),
		"story_title": row.story.title,
		"story_text": row.story.text,
		"mistakes_log": [
			{
				"id": m.id,
				"session_id": m.session_id,
				"expected_word": m.expected_word,
				"spoken_word": m.spoken_word,
				"position": m.position,
				"created_at": m.created_at,
			}
			for m in row.mistake_log
		],
	}
