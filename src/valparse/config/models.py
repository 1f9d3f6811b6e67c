"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, valparse.toml only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from valparse.domain.serialize import KEEP_CHARS, MAX_STRING_LENGTH


class SerializeConfig(BaseModel):
    """[serialize] section: limits for rendered values.

    A truncated string keeps ``keep`` characters at each end, so
    ``2 * keep`` may not exceed ``max_length``.
    """

    model_config = {"frozen": True}

    max_length: int = Field(default=MAX_STRING_LENGTH, ge=1)
    keep: int = Field(default=KEEP_CHARS, ge=1)

    @model_validator(mode="after")
    def _keep_fits(self) -> SerializeConfig:
        if 2 * self.keep > self.max_length:
            msg = f"keep ({self.keep}) is more than half of max_length ({self.max_length})"
            raise ValueError(msg)
        return self


class CheckConfig(BaseModel):
    """[check] section: defaults for ``valparse check``."""

    model_config = {"frozen": True}

    default_atoms: list[str] = Field(default_factory=list)
    prefix: str = ""
