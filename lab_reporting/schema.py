from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ReportDataError(ValueError):
    """Raised when required report data is missing or invalid."""


class AuthenticationError(RuntimeError):
    """Raised when no user identity is available to attribute the report."""


class BrandingAssetError(RuntimeError):
    """Raised when the branding asset cannot be fetched or decoded."""


class MonthlyPoint(BaseModel):
    month: str
    experiments: float = Field(default=0, ge=0)
    reports: float = Field(default=0, ge=0)
    tasks: float = Field(default=0, ge=0)


class StatusSlice(BaseModel):
    name: str
    value: float = Field(ge=0)


class ProductivityPoint(BaseModel):
    week: str
    productivity: float = Field(ge=0)


class AnalyticsPayload(BaseModel):
    totalExperiments: int = Field(default=0, ge=0)
    completedExperiments: int = Field(default=0, ge=0)
    totalTasks: int = Field(default=0, ge=0)
    completedTasks: int = Field(default=0, ge=0)
    totalProjects: int = Field(default=0, ge=0)
    activeTeamMembers: int = Field(default=0, ge=0)
    avgCompletionTime: float = Field(default=0, ge=0)

    monthlyData: List[MonthlyPoint] = Field(default_factory=list)
    experimentStatusData: List[StatusSlice] = Field(default_factory=list)
    productivityData: List[ProductivityPoint] = Field(default_factory=list)
