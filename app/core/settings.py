from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "relumen-admin-service"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="TCP port the HTTP server listens on.",
    )

    # Document store (Firestore)
    # IMPORTANT: the credential file holds private key material. Never log its content.
    firebase_credentials_path: str = Field(
        default="./Firebase_Admin.json",
        validation_alias=AliasChoices(
            "FIREBASE_CREDENTIALS_PATH",
            "GOOGLE_APPLICATION_CREDENTIALS",
            "firebase_credentials_path",
        ),
        description="Path to the service-account JSON key used to authenticate to Firestore.",
    )
    firestore_project_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FIRESTORE_PROJECT_ID", "firestore_project_id"),
        description="Override for the Google Cloud project (defaults to the key's project_id).",
    )
    firestore_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("FIRESTORE_TIMEOUT_SECONDS", "firestore_timeout_seconds"),
        description="Timeout for a single document lookup (seconds).",
    )
    admin_collection: str = Field(
        default="admin",
        min_length=1,
        validation_alias=AliasChoices("ADMIN_COLLECTION", "admin_collection"),
        description="Collection holding the administrative record.",
    )
    admin_document_id: str | None = Field(
        # Only the HTTP server needs it; it is checked at server startup.
        default=None,
        validation_alias=AliasChoices("ADMIN_DOCUMENT_ID", "admin_document_id"),
        description="Identifier of the administrative record served by GET /admin.",
    )

    # Generative completion (Gemini)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY", "gemini_api_key"),
        description="Gemini API key (required by the completion CLI).",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
        description="Gemini model identifier used for completions.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias=AliasChoices("GEMINI_BASE_URL", "gemini_base_url"),
        description="Base URL for the Gemini REST API (override for proxies/emulators).",
    )
    gemini_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("GEMINI_TIMEOUT_SECONDS", "gemini_timeout_seconds"),
        description="Timeout for Gemini API requests (seconds).",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
