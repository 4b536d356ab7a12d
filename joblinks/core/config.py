"""Configuration models and YAML loader for the job link classifier."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class ClassifierConfig(BaseModel):
    """Signal weights and tier thresholds for relatedness scoring."""

    job_board_weight: int = Field(default=40, ge=0)
    path_pattern_weight: int = Field(default=30, ge=0)
    url_keyword_weight: int = Field(default=20, ge=0)
    subject_weight: int = Field(default=25, ge=0)
    sender_weight: int = Field(default=20, ge=0)
    snippet_weight: int = Field(default=15, ge=0)
    snippet_min_terms: int = Field(default=2, ge=1)
    high_threshold: int = Field(default=50, ge=0)
    job_link_threshold: int = Field(default=30, ge=0)

    @model_validator(mode="after")
    def thresholds_ordered(self) -> "ClassifierConfig":
        if self.high_threshold < self.job_link_threshold:
            msg = "high_threshold must be >= job_link_threshold"
            raise ValueError(msg)
        return self


class TaggingConfig(BaseModel):
    """Tag caps for categorization and record assembly."""

    content_tag_limit: int = Field(default=5, ge=1)
    record_content_tag_limit: int = Field(default=3, ge=1)
    title_tag_limit: int = Field(default=3, ge=1)
    record_tag_limit: int = Field(default=5, ge=1)


class IngestConfig(BaseModel):
    """Batch ingest behaviour."""

    filter_job_links: bool = True


class MailQueryConfig(BaseModel):
    """Inbox search query used by the mail transport."""

    newer_than_days: int = Field(default=30, ge=1)
    max_results: int = Field(default=50, ge=1, le=100)
    use_job_filter: bool = True


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/joblinks.db"

    @field_validator("path")
    @classmethod
    def path_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "database path must not be empty"
            raise ValueError(msg)
        return v.strip()


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    tagging: TaggingConfig = Field(default_factory=TaggingConfig)
    ingest: IngestConfig = Field(default_factory=IngestConfig)
    mail: MailQueryConfig = Field(default_factory=MailQueryConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
