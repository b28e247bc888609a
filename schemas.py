from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from lab_reporting.schema import AnalyticsPayload


# --------- Common ---------
class ErrorDetail(BaseModel):
    field: Optional[str] = None
    issue: Optional[str] = None


class ErrorEnvelope(BaseModel):
    code: str = Field(default="SERVER_ERROR")
    message: str
    details: Optional[List[ErrorDetail]] = None


class ErrorResponse(BaseModel):
    error: ErrorEnvelope


# --------- Inputs ---------
class AnalyticsReportRequest(BaseModel):
    """Analytics payload plus an optional report title."""
    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {
                "data": {
                    "totalExperiments": 10,
                    "completedExperiments": 3,
                    "totalTasks": 20,
                    "completedTasks": 12,
                    "totalProjects": 2,
                    "activeTeamMembers": 4,
                    "avgCompletionTime": 6.5,
                    "monthlyData": [{"month": "Jan", "experiments": 4, "reports": 2, "tasks": 9}],
                    "experimentStatusData": [{"name": "completed", "value": 3}, {"name": "in_progress", "value": 7}],
                    "productivityData": [{"week": "W1", "productivity": 72}, {"week": "W2", "productivity": 80}],
                },
                "reportTitle": "KAPELCZAK LABORATORY - ANALYTICS REPORT",
            }
        ]
    })

    data: AnalyticsPayload = Field(..., description="Aggregated counters and series to render.")
    reportTitle: Optional[str] = Field(default=None, description="Title printed at the top of the report.")
