# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)

_WEAK_SECRETS = {"dev", "development", "test", "secret", "changeme"}


def _as_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field(alias="DATABASE_URL", min_length=1)
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SETTINGS


class SecurityConfig(BaseSettings):
    # Token signing
    jwt_secret: str = Field(alias="JWT_SECRET", min_length=16)
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_seconds: int = Field(3600, ge=1, alias="TOKEN_TTL_SECONDS")
    phase_ticket_ttl_seconds: int = Field(7200, ge=1, alias="PHASE_TICKET_TTL_SECONDS")

    # Credential hashing, e.g. "scrypt" or "pbkdf2:sha256:600000"
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SETTINGS

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _as_bool(value)


class ScoringConfig(BaseSettings):
    quiz_points: int = Field(10, ge=0, alias="QUIZ_POINTS")
    code_points: int = Field(50, ge=0, alias="CODE_POINTS")
    max_points_per_submission: int = Field(100, ge=0, alias="MAX_POINTS_PER_SUBMISSION")
    ranking_limit: int = Field(10, ge=1, alias="RANKING_LIMIT")
    code_max_length: int = Field(20000, ge=1, alias="CODE_MAX_LENGTH")

    model_config = _SETTINGS


class NewsConfig(BaseSettings):
    api_key: str = Field("", alias="NEWS_API_KEY")
    base_url: str = Field("https://newsapi.org/v2", alias="NEWS_BASE_URL")
    category: str = Field("science", alias="NEWS_CATEGORY")
    query: str = Field("environment", alias="NEWS_QUERY")
    timeout: float = Field(10.0, ge=0.1, alias="NEWS_TIMEOUT")

    model_config = _SETTINGS


class LlmConfig(BaseSettings):
    api_key: str = Field("", alias="OPENAI_API_KEY")
    base_url: str = Field("https://api.openai.com/v1", alias="LLM_BASE_URL")
    model: str = Field("gpt-4", alias="LLM_MODEL")
    max_tokens: int = Field(500, ge=1, alias="LLM_MAX_TOKENS")
    timeout: float = Field(30.0, ge=0.1, alias="LLM_TIMEOUT")

    model_config = _SETTINGS


class LogConfig(BaseSettings):
    level: str = Field("INFO", alias="LOG_LEVEL")
    debug: bool = Field(False, alias="DEBUG_LOGGING")
    to_file: bool = Field(True, alias="LOG_TO_FILE")
    file: str = Field("instance/app.log", alias="LOG_FILE")

    model_config = _SETTINGS

    @field_validator("debug", "to_file", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _as_bool(value)

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def _log_config_factory() -> LogConfig:
    return LogConfig()  # type: ignore[call-arg]


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _scoring_config_factory() -> ScoringConfig:
    return ScoringConfig()  # type: ignore[call-arg]


def _news_config_factory() -> NewsConfig:
    return NewsConfig()  # type: ignore[call-arg]


def _llm_config_factory() -> LlmConfig:
    return LlmConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")

    log: LogConfig = Field(default_factory=_log_config_factory)
    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    scoring: ScoringConfig = Field(default_factory=_scoring_config_factory)
    news: NewsConfig = Field(default_factory=_news_config_factory)
    llm: LlmConfig = Field(default_factory=_llm_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.security.jwt_secret.lower() in _WEAK_SECRETS or len(self.security.jwt_secret) < 32:
            print(
                "\nCRITICAL SECURITY ERROR: weak JWT_SECRET detected in production!\n"
                "   JWT_SECRET must be a strong random value of at least 32 characters.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("HSTS is DISABLED (recommended for HTTPS)")
        if not self.news.api_key:
            warnings.append("NEWS_API_KEY is empty, phases cannot be generated")
        if not self.llm.api_key:
            warnings.append("OPENAI_API_KEY is empty, phases cannot be generated")

        if warnings:
            print("\nPRODUCTION WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "LlmConfig",
    "LogConfig",
    "NewsConfig",
    "ScoringConfig",
    "SecurityConfig",
    "load_config",
]
