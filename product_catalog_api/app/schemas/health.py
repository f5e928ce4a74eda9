"""Response shape of the health endpoint."""

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Liveness report.

    ``status`` is always ``"ok"`` when the process answers; ``storage``
    names the active backend (``memory`` or ``cosmos``).
    """

    status: str = Field(..., examples=["ok"])
    storage: str = Field(..., examples=["memory"])
