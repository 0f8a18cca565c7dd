from storyreader.settings import Settings


def test_cors_origins_plain_value(monkeypatch):
	monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173")
	assert Settings().cors_origin_list() == ["http://localhost:5173"]


def test_cors_origins_comma_separated(monkeypatch):
	monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://reader.example.com,")
	assert Settings().cors_origin_list() == ["http://localhost:5173", "https://reader.example.com"]


def test_cors_origins_default_allows_all(monkeypatch):
	monkeypatch.delenv("CORS_ORIGINS", raising=False)
	assert Settings(_env_file=None).cors_origin_list() == ["*"]
