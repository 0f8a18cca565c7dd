from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Database (falls back to a local SQLite file)
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Auth configuration
	jwt_secret_key: str = Field(default="change-me", validation_alias="JWT_SECRET_KEY")
	jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
	# 7 days
	access_token_expire_minutes: int = Field(default=10080, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
	# Self-service registration as admin is refused unless enabled
	allow_admin_signup: bool = Field(default=False, validation_alias="ALLOW_ADMIN_SIGNUP")

	# Seed data
	seed_on_startup: bool = Field(default=True, validation_alias="SEED_ON_STARTUP")
	seed_admin_email: str | None = Field(default=None, validation_alias="SEED_ADMIN_EMAIL")
	seed_admin_password: str | None = Field(default=None, validation_alias="SEED_ADMIN_PASSWORD")
	seed_student_email: str | None = Field(default=None, validation_alias="SEED_STUDENT_EMAIL")
	seed_student_password: str | None = Field(default=None, validation_alias="SEED_STUDENT_PASSWORD")

	# HTTP
	# Comma-separated, e.g. "http://localhost:5173,https://reader.example.com"
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	def cors_origin_list(self) -> List[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
