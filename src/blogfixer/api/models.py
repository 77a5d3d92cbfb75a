"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field

from blogfixer.models import ProcessingMode


class ConnectionRequest(BaseModel):
    """Request model for the connection test endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    store_url: str = Field(default="", alias="storeUrl", description="Shopify store URL")
    access_token: str = Field(
        default="", alias="accessToken", description="Admin API access token"
    )


class ConnectionResponse(BaseModel):
    """Response model for the connection test endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(description="Whether the store accepted the credentials")
    shop_name: str | None = Field(default=None, alias="shopName", description="Shop name")
    domain: str | None = Field(default=None, description="Shop primary domain")
    error: str | None = Field(default=None, description="Why the connection failed")


class ProcessRequest(BaseModel):
    """Request model for the process endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    store_url: str = Field(alias="storeUrl", min_length=1, description="Shopify store URL")
    access_token: str = Field(
        alias="accessToken", min_length=1, description="Admin API access token"
    )
    mode: ProcessingMode = Field(
        default=ProcessingMode.DRY_RUN, description="'fix' to update articles, 'dry-run' to report"
    )
    limit: int | None = Field(
        default=None, ge=1, description="Maximum number of articles to process"
    )


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")
