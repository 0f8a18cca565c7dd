from functools import lru_cache

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storyreader.db import Base, get_db
from storyreader.main import app
from storyreader.models import Story, User
from storyreader.routers.auth import hash_password, issue_token

PASSWORD = "secret123"

engine = create_engine(
	"sqlite://",
	connect_args={"check_same_thread": False},
	poolclass=StaticPool,
	future=True,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


@lru_cache(maxsize=1)
def _password_hash() -> str:
	# bcrypt is slow; one hash is enough for every fixture user
	return hash_password(PASSWORD)


@pytest.fixture
def db_session():
	Base.metadata.create_all(bind=engine)
	db = TestingSessionLocal()
	try:
		yield db
	finally:
		db.close()
		Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
	def _get_db():
		yield db_session

	app.dependency_overrides[get_db] = _get_db
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


def make_user(db, email="student@example.com", role="student", name="Student User") -> User:
	user = User(name=name, email=email, password_hash=_password_hash(), role=role)
	db.add(user)
	db.commit()
	db.refresh(user)
	return user


def bearer(db, user) -> dict:
	return {"Authorization": f"Bearer {issue_token(db, user)}"}


@pytest.fixture
def student(db_session):
	return make_user(db_session)


@pytest.fixture
def admin(db_session):
	return make_user(db_session, email="admin@example.com", role="admin", name="Admin User")


@pytest.fixture
def student_headers(db_session, student):
	return bearer(db_session, student)


@pytest.fixture
def admin_headers(db_session, admin):
	return bearer(db_session, admin)


@pytest.fixture
def story(db_session):
	row = Story(title="The Cat", text="The cat sat on the mat.", difficulty="beginner")
	db_session.add(row)
	db_session.commit()
	db_session.refresh(row)
	return row
