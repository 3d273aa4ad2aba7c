"""
Freshrack Backend — Pydantic Response Schemas
===============================================

What:  Response models for the mutating, stats, error and health endpoints.
How:   FastAPI serializes these and publishes them in the OpenAPI document.

Envelope convention:
    Mutations return `{"success": true, ...}`; reads return raw documents
    or arrays with no envelope. Food and note documents are open-schema
    dicts and have no model here.

Field names are the camelCase keys clients already consume
(insertedId, modifiedCount, deletedCount, nearlyExpired).
"""

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Mutation Results
# ══════════════════════════════════════════════════════════════════════════


class InsertResponse(BaseModel):
    """Returned with HTTP 201 by POST /api/foods and POST /api/foods/{id}/notes."""
    success: bool = Field(default=True)
    insertedId: str = Field(description="Id assigned to the new record")


class UpdateResponse(BaseModel):
    """Returned by PUT /api/foods/{id} when the Id matched a record."""
    success: bool = Field(default=True)
    modifiedCount: int = Field(description="1 if any stored value changed, else 0")


class DeleteResponse(BaseModel):
    """Returned by DELETE /api/foods/{id} when a record was removed."""
    success: bool = Field(default=True)
    deletedCount: int = Field(description="Number of records removed (always 1)")


# ══════════════════════════════════════════════════════════════════════════
# Derived Views
# ══════════════════════════════════════════════════════════════════════════


class StatsResponse(BaseModel):
    """
    Expiry breakdown of the whole collection at one instant.

    Invariant: total == expired + nearlyExpired + safe
    """
    total: int
    expired: int
    nearlyExpired: int
    safe: int


# ══════════════════════════════════════════════════════════════════════════
# Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Body of every 404 and 500 response.

    Example:
        {"success": false, "message": "Food not found"}
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
