from app.core.config import Settings


def test_heroku_style_url_is_normalized():
    s = Settings(DATABASE_URL="postgres://u:p@db:5432/app")
    assert s.SQLALCHEMY_DATABASE_URI == "postgresql://u:p@db:5432/app"


def test_discrete_postgres_parts():
    s = Settings(
        DATABASE_URL="",
        POSTGRES_USER="api",
        POSTGRES_PASSWORD="secret",
        POSTGRES_DB_NAME="posts",
        POSTGRES_DB_HOST="db",
    )
    assert s.DATABASE_URL is None
    assert s.SQLALCHEMY_DATABASE_URI == "postgresql://api:secret@db/posts"


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_defaults():
    s = Settings(DATABASE_URL="sqlite://")
    assert s.PORT == 4444
    assert s.BASE_URL == "http://localhost:4444"
