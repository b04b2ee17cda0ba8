"""Configuration models.

The CLI configuration only says where planner data lives and how the client
behaves. The planner data itself, timer settings included, is part of the
persisted snapshot.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Cloud HTTP client options."""

    timeout: int = Field(default=30, gt=0, description="Request timeout in seconds")
    retry: int = Field(default=3, ge=0, description="Retries for 5xx and network errors")


class OutputConfig(BaseModel):
    """Terminal output options."""

    color: bool = Field(default=True, description="Colored output")
    quiet_sounds: bool = Field(default=False, description="Never ring the terminal bell")


class Context(BaseModel):
    """A named storage target: a SQLite vault file or a cloud API."""

    name: str = Field(..., description="Unique context name")
    type: Literal["local", "remote"]
    source: str = Field(..., description="Vault path (local) or API base URL (remote)")
    user_id: str | None = Field(default=None, description="Cloud user identity")
    description: str = ""

    @field_validator("source")
    @classmethod
    def source_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("source cannot be empty")
        return v


class AppConfig(BaseModel):
    """Contents of config.json."""

    current_context_name: str = "local"
    contexts: list[Context] = Field(default_factory=list)
    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def get_context(self, name: str) -> Context:
        """Look up a context by name.

        Raises:
            ValueError: If no context has that name
        """
        match = next((ctx for ctx in self.contexts if ctx.name == name), None)
        if match is None:
            known = ", ".join(ctx.name for ctx in self.contexts) or "none"
            raise ValueError(f"Context '{name}' not found (known: {known})")
        return match

    def get_current_context(self) -> Context:
        return self.get_context(self.current_context_name)
