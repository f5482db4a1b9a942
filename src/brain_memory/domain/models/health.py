from typing import Literal

from pydantic import BaseModel


class HealthChecks(BaseModel):
    store: str = "disconnected"
    embedding_service: str = "unknown"
    index: Literal["exists", "missing"] = "missing"


class HealthReport(BaseModel):
    status: Literal["healthy", "degraded"]
    checks: HealthChecks
