from storyreader.models import MistakeLog, ReadingSession, Story
from storyreader.recorder import record_session
from storyreader.scoring import score_reading


def test_list_stories_hides_text(client, student_headers, story):
	r = client.get("/api/stories", headers=student_headers)
	assert r.status_code == 200
	items = r.json()
	assert len(items) == 1
	assert items[0]["title"] == "The Cat"
	assert set(items[0]) == {"id", "title", "difficulty", "created_at"}


def test_get_story(client, student_headers, story):
	r = client.get(f"/api/stories/{story.id}", headers=student_headers)
	assert r.status_code == 200
	assert r.json()["text"] == "The cat sat on the mat."


def test_get_missing_story(client, student_headers):
	r = client.get("/api/stories/999", headers=student_headers)
	assert r.status_code == 404
	assert r.json()["detail"] == "Story not found"


def test_student_cannot_create_story(client, student_headers):
	r = client.post("/api/stories", headers=student_headers, json={"title": "T", "text": "x"})
	assert r.status_code == 403
	assert r.json()["detail"] == "Admin access required"


def test_admin_creates_story(client, db_session, admin_headers):
	r = client.post(
		"/api/stories",
		headers=admin_headers,
		json={"title": "Wheat", "text": "Who will help me?", "difficulty": "intermediate"},
	)
	assert r.status_code == 201
	body = r.json()
	assert body["message"] == "Story created successfully"
	row = db_session.get(Story, body["id"])
	assert row.difficulty == "intermediate"


def test_create_story_defaults_to_beginner(client, db_session, admin_headers):
	r = client.post("/api/stories", headers=admin_headers, json={"title": "Hen", "text": "A little red hen."})
	assert db_session.get(Story, r.json()["id"]).difficulty == "beginner"


def test_create_story_validates_input(client, admin_headers):
	assert client.post("/api/stories", headers=admin_headers, json={"title": "", "text": "x"}).status_code == 422
	assert client.post(
		"/api/stories", headers=admin_headers, json={"title": "T", "text": "x", "difficulty": "expert"}
	).status_code == 422


def test_admin_updates_story(client, db_session, admin_headers, story):
	r = client.put(f"/api/stories/{story.id}", headers=admin_headers, json={"title": "The Hat", "video_url": "https://example.com/v"})
	assert r.status_code == 200
	db_session.refresh(story)
	assert story.title == "The Hat"
	assert story.text == "The cat sat on the mat."
	assert story.video_url == "https://example.com/v"


def test_update_missing_story(client, admin_headers):
	assert client.put("/api/stories/404", headers=admin_headers, json={"title": "x"}).status_code == 404


def test_delete_story_removes_its_sessions(client, db_session, admin_headers, student, story):
	record_session(db_session, student.id, story.id, score_reading(story.text, "the cat"))
	story_id = story.id
	r = client.delete(f"/api/stories/{story_id}", headers=admin_headers)
	assert r.status_code == 200
	db_session.expire_all()
	assert db_session.get(Story, story_id) is None
	assert db_session.query(ReadingSession).count() == 0
	assert db_session.query(MistakeLog).count() == 0


def test_delete_missing_story(client, admin_headers):
	assert client.delete("/api/stories/404", headers=admin_headers).status_code == 404
