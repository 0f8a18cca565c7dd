from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from .db import Base


class User(Base):
	__tablename__ = "users"
	id = Column(Integer, primary_key=True, autoincrement=True)
	name = Column(String(128), nullable=False)
	email = Column(String(256), unique=True, index=True, nullable=False)
	password_hash = Column(String(256), nullable=False)
	role = Column(String(16), default="student", nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	__table_args__ = (CheckConstraint("role IN ('student', 'admin')", name="ck_users_role"),)


class AuthSession(Base):
	__tablename__ = "auth_sessions"
	# Token jti; a bearer token is honoured only while its row exists
	session_id = Column(String(64), primary_key=True)
	user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	last_activity_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Story(Base):
	__tablename__ = "stories"
	id = Column(Integer, primary_key=True, autoincrement=True)
	title = Column(String(256), nullable=False)
	text = Column(Text, nullable=False)
	video_url = Column(String(512), nullable=True)
	difficulty = Column(String(16), default="beginner", nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	__table_args__ = (
		CheckConstraint("difficulty IN ('beginner', 'intermediate', 'advanced')", name="ck_stories_difficulty"),
	)


class ReadingSession(Base):
	__tablename__ = "reading_sessions"
	id = Column(Integer, primary_key=True, autoincrement=True)
	user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
	story_id = Column(Integer, ForeignKey("stories.id", ondelete="CASCADE"), nullable=False, index=True)
	# Rounded to 2 decimals on write
	accuracy = Column(Float, nullable=False)
	correct_words = Column(Integer, nullable=False)
	total_words = Column(Integer, nullable=False)
	mistakes = Column(Integer, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

	story = relationship("Story")
	mistake_log = relationship(
		"MistakeLog",
		order_by="MistakeLog.position",
		cascade="all, delete-orphan",
		passive_deletes=True,
	)


class MistakeLog(Base):
	__tablename__ = "mistakes_log"
	id = Column(Integer, primary_key=True, autoincrement=True)
	session_id = Column(Integer, ForeignKey("reading_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
	expected_word = Column(String(256), nullable=False, default="")
	spoken_word = Column(String(256), nullable=False, default="")
	position = Column(Integer, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
