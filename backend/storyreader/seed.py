"""Sample stories and optional seed accounts.

Run ``python -m storyreader.seed`` to populate an empty database, or leave
``SEED_ON_STARTUP`` enabled to do the same when the API starts.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .db import Base, SessionLocal, engine
from .models import Story, User
from .routers.auth import hash_password
from .settings import settings

logger = logging.getLogger(__name__)


SAMPLE_STORIES: List[Dict[str, str]] = [
	{
		"title": "The Little Red Hen",
		"difficulty": "beginner",
		"text": (
			"Once upon a time there was a little red hen. She lived on a farm with a dog, a cat, and a pig. "
			"One day the little red hen found some grains of wheat. Who will help me plant these grains? she asked. "
			"Not I said the dog. Not I said the cat. Not I said the pig. "
			"Then I will plant them myself said the little red hen. And she did."
		),
	},
	{
		"title": "The Friendship",
		"difficulty": "intermediate",
		"text": (
			"Friendship is one of the most valuable treasures in life. True friends are there for you in good times and bad times. "
			"They listen when you need to talk and offer help without expecting anything in return. "
			"A real friend accepts you for who you are and helps you become the best version of yourself. "
			"Building strong friendships takes time, trust, and mutual respect."
		),
	},
	{
		"title": "Climate Change",
		"difficulty": "advanced",
		"text": (
			"Climate change represents one of the most significant challenges facing humanity in the twenty-first century. "
			"The scientific consensus indicates that human activities, particularly the emission of greenhouse gases "
			"through fossil fuel combustion and deforestation, are driving unprecedented changes in global climate patterns. "
			"These alterations manifest through rising temperatures, shifting precipitation patterns, "
			"and increased frequency of extreme weather events."
		),
	},
]


def _ensure_user(db: Session, email: Optional[str], password: Optional[str], name: str, role: str) -> bool:
	if not email or not password:
		return False
	email = email.strip().lower()
	if db.query(User).filter(User.email == email).first():
		logger.info("Seed %s %s already exists", role, email)
		return False
	db.add(User(name=name, email=email, password_hash=hash_password(password), role=role))
	db.commit()
	logger.info("Seed %s %s created", role, email)
	return True


def seed_database(db: Session) -> int:
	"""Create configured seed users and, if there are no stories yet, the sample stories.

	Returns the number of stories inserted.
	"""
	_ensure_user(db, settings.seed_admin_email, settings.seed_admin_password, "Admin User", "admin")
	_ensure_user(db, settings.seed_student_email, settings.seed_student_password, "Student User", "student")

	existing = db.query(Story).count()
	if existing:
		logger.info("Stories already exist (%d in database)", existing)
		return 0
	for story in SAMPLE_STORIES:
		db.add(Story(title=story["title"], text=story["text"], difficulty=story["difficulty"], video_url=""))
	db.commit()
	logger.info("Added %d sample stories", len(SAMPLE_STORIES))
	return len(SAMPLE_STORIES)


def main() -> None:
	from .logging_config import setup_logging

	setup_logging()
	Base.metadata.create_all(bind=engine)
	db = SessionLocal()
	try:
		seed_database(db)
	finally:
		db.close()


if __name__ == "__main__":
	main()
