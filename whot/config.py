"""Engine settings."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "WHOT_"


class EngineSettings(BaseModel):
    hand_size: int = Field(5, ge=1, description="Cards dealt to each participant.")
    session_ttl_seconds: float = Field(3600, gt=0, description="Idle time before a session may be evicted.")
    practice_human_id: str = Field("player1", min_length=1)
    practice_bot_id: str = Field("ai", min_length=1)
    max_bot_moves: int = Field(50, ge=1, description="Upper bound on consecutive automated moves.")
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @field_validator("practice_bot_id")
    @classmethod
    def validate_distinct_ids(cls, value: str, info) -> str:
        if value == info.data.get("practice_human_id"):
            raise ValueError("Practice participant ids must differ.")
        return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """Build settings from ``WHOT_*`` variables, defaulting anything unset."""
    source = os.environ if environ is None else environ
    values = {}
    for name in EngineSettings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in source:
            values[name] = source[key]
    return EngineSettings(**values)
