"""Pydantic schemas for developer management endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterDeveloperRequest(BaseModel):
    """Request schema for creating a developer account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=128, description="Developer name")
    email: EmailStr = Field(..., description="Developer email address")
    password: str = Field(..., min_length=1, description="Initial password")


class DeveloperResponse(BaseModel):
    """A developer with their current workload."""

    id: str
    name: str
    email: str
    assigned_projects: int = Field(0, description="Projects assigned to this developer")


class DeveloperListResponse(BaseModel):
    developers: list[DeveloperResponse]
