# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from pydantic_settings import BaseSettings

from docfit.services.attachment.budget import DEFAULT_TOKEN_BUDGET


class Settings(BaseSettings):
    # Project configuration
    PROJECT_NAME: str = "docfit"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    # API docs toggle (from env ENABLE_API_DOCS, default True)
    ENABLE_API_DOCS: bool = True

    # Environment configuration
    ENVIRONMENT: str = "development"  # development or production
    LOG_LEVEL: str = "INFO"

    # File upload configuration
    MAX_UPLOAD_FILE_SIZE_MB: int = 100  # Maximum file size in MB

    # Document budget configuration
    # Default token target for an attached document; the chat history and
    # system instructions share the rest of the model's context window.
    DOCUMENT_TOKEN_BUDGET: int = DEFAULT_TOKEN_BUDGET
    # Upper bound for a per-request token_budget override
    MAX_TOKEN_BUDGET: int = 32000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global configuration instance
settings = Settings()
