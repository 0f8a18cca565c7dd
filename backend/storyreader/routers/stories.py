from __future__ import annotations
import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Story
from .auth import User, get_current_user, require_admin


router = APIRouter(prefix="/api/stories", tags=["stories"])

logger = logging.getLogger(__name__)

Difficulty = Literal["beginner", "intermediate", "advanced"]


class StorySummary(BaseModel):
	id: int
	title: str
	difficulty: str
	created_at: datetime


class StoryOut(StorySummary):
	text: str
	video_url: Optional[str] = None


class StoryCreate(BaseModel):
	title: str = Field(min_length=1, max_length=256)
	text: str = Field(min_length=1)
	video_url: Optional[str] = None
	difficulty: Difficulty = "beginner"


class StoryUpdate(BaseModel):
	title: Optional[str] = Field(default=None, min_length=1, max_length=256)
	text: Optional[str] = Field(default=None, min_length=1)
	video_url: Optional[str] = None
	difficulty: Optional[Difficulty] = None


def _story_out(story: Story) -> StoryOut:
	return StoryOut(
		id=story.id,
		title=story.title,
		text=story.text,
		video_url=story.video_url,
		difficulty=story.difficulty,
		created_at=story.created_at,
	)


def _get_story_or_404(db: Session, story_id: int) -> Story:
	story = db.get(Story, story_id)
	if not story:
		raise HTTPException(status_code=404, detail="Story not found")
	return story


@router.get("", response_model=list[StorySummary])
async def list_stories(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	rows = db.query(Story).order_by(Story.created_at.desc(), Story.id.desc()).all()
	return [
		StorySummary(id=s.id, title=s.title, difficulty=s.difficulty, created_at=s.created_at)
		for s in rows
	]


@router.get("/{story_id}", response_model=StoryOut)
async def get_story(story_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	return _story_out(_get_story_or_404(db, story_id))


@router.post("", status_code=201)
async def create_story(req: StoryCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
	story = Story(title=req.title.strip(), text=req.text, video_url=req.video_url, difficulty=req.difficulty)
	db.add(story)
	db.commit()
	db.refresh(story)
	logger.info("Story %s created by user %s", story.id, admin.id)
	return {"message": "Story created successfully", "id": story.id}


@router.put("/{story_id}")
async def update_story(story_id: int, req: StoryUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
	story = _get_story_or_404(db, story_id)
	changes = req.model_dump(exclude_unset=True)
	# title, text and difficulty are NOT NULL; an explicit null leaves them unchanged
	for key, value in changes.items():
		if value is None and key != "video_url":
			continue
		setattr(story, key, value)
	db.add(story)
	db.commit()
	logger.info("Story %s updated by user %s (%s)", story_id, admin.id, ", ".join(sorted(changes)) or "no fields")
	return {"message": "Story updated successfully"}


@router.delete("/{story_id}")
async def delete_story(story_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
	story = _get_story_or_404(db, story_id)
	db.delete(story)
	db.commit()
	logger.info("Story %s deleted by user %s", story_id, admin.id)
	return {"message": "Story deleted successfully"}
