"""
Tests for settings defaults and first admin seeding
"""
import pytest
from pydantic import ValidationError

from app.core.config import Settings, settings
from app.core.permissions import Role
from app.core.security import verify_password
from app.db.init_db import init_db
from app.models.user import User

@pytest.mark.unit
class TestSettings:

    def test_secret_key_is_required(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "SECRET_KEY" in str(exc_info.value)

    def test_cache_and_admin_password_off_by_default(self, monkeypatch):
        monkeypatch.delenv("CACHE_ENABLED", raising=False)
        monkeypatch.delenv("FIRST_ADMIN_PASSWORD", raising=False)

        config = Settings(_env_file=None, SECRET_KEY="from-env")

        assert config.CACHE_ENABLED is False
        assert config.FIRST_ADMIN_PASSWORD is None

    def test_cors_origins_from_comma_string(self):
        config = Settings(_env_file=None, SECRET_KEY="x", BACKEND_CORS_ORIGINS="http://a, http://b")
        assert config.BACKEND_CORS_ORIGINS == ["http://a", "http://b"]

@pytest.mark.unit
class TestInitDb:

    def test_admin_not_seeded_without_password(self, test_db, monkeypatch, caplog):
        monkeypatch.setattr(settings, "FIRST_ADMIN_PASSWORD", None)

        init_db(test_db)

        assert test_db.query(User).count() == 0
        assert "skipping admin seed" in caplog.text

    def test_admin_seeded_with_configured_password(self, test_db, monkeypatch):
        monkeypatch.setattr(settings, "FIRST_ADMIN_PASSWORD", "s3cret-password")

        init_db(test_db)
        init_db(test_db)

        admins = test_db.query(User).all()
        assert len(admins) == 1
        assert admins[0].email == settings.FIRST_ADMIN_EMAIL
        assert admins[0].role == Role.ADMIN
        assert verify_password("s3cret-password", admins[0].hashed_password)
