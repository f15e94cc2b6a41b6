from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    # Wire format used when the caller does not pick one explicitly
    dbss_wire_format: Literal["envelope", "framed", "framed-json"] = "envelope"
    # Historical `!result` exit mapping: every non-verified outcome exits 1
    dbss_legacy_exit_codes: bool = False
    dbss_log_level: LogLevel = "WARNING"

    @field_validator("dbss_log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings loaded from the environment on first use.

    Loading is deferred so an invalid ``DBSS_*`` variable surfaces as a
    ``ValidationError`` at the call site instead of failing the import.
    """
    return Settings()


def describe_error(e: ValidationError) -> str:
    """One-line summary of a settings validation failure."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}" for err in e.errors()
    )


__all__ = ["Settings", "LogLevel", "get_settings", "describe_error"]
