"""Schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness payload plus database reachability, for load balancers."""

    status: Literal["ok"] = "ok"
    version: str = Field(description="API version string")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Omitted when the database check is not performed",
    )
