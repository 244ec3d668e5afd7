"""Records returned by the remote hosts control API.

Only the fields the bridge reads are declared; anything else the backend sends
is ignored. Display fields are lenient: a null or oddly typed value renders as
text instead of failing the whole listing.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


AuthMethod = Literal["password", "key"]


def _as_text(v: Any) -> str:
    return "" if v is None else str(v)


class HostRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host_id: Optional[Any] = None
    name: str = ""
    address: str = ""
    port: Optional[str] = "22"
    user: str = ""
    auth_method: str = ""
    last_connected: Optional[str] = None

    @property
    def endpoint(self) -> str:
        if self.port is None:
            return self.address
        return f"{self.address}:{self.port}"

    @field_validator("name", "address", "user", "auth_method", mode="before")
    @classmethod
    def _stringify_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("port", mode="before")
    @classmethod
    def _stringify_port(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("last_connected", mode="before")
    @classmethod
    def _stringify_timestamp(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)


class SessionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session_id: Optional[Any] = None
    session_name: str = ""
    created_at: str = ""

    @field_validator("session_name", "created_at", mode="before")
    @classmethod
    def _stringify_text(cls, v: Any) -> str:
        return _as_text(v)


class AddHostResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[Any] = None


class SessionOutput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    output: Optional[str] = Field(default=None)
