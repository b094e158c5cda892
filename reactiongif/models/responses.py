"""API response models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-payment error response."""

    error: str = Field(..., description="Static, client-safe error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")
    services: dict[str, bool] = Field(
        default_factory=dict, description="Whether each upstream service is configured"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "services": {"openai": True, "giphy": True, "payment": True},
            }
        }


class ClientConfigResponse(BaseModel):
    """Public settings the browser UI needs."""

    price: str
    network: str
    asset: str
    generation_mode: str = Field(..., serialization_alias="generationMode")
    client_id: str | None = Field(default=None, serialization_alias="clientId")
