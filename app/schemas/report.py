from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.report import Report


class ReportOut(Report):
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")

    @classmethod
    def from_report(cls, report: Report, photo_url: Optional[str] = None) -> "ReportOut":
        return cls(**report.model_dump(), photo_url=photo_url)


class StatusUpdate(BaseModel):
    # se valida contra ReportStatus en el store para devolver 400 y no 422
    status: Optional[str] = None


class ReportCreated(BaseModel):
    message: str
    equipment: ReportOut


class ReportUpdated(BaseModel):
    message: str
    equipment: ReportOut


class ReportDeleted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_equipment: ReportOut = Field(alias="deletedEquipment")


class HealthOut(BaseModel):
    status: str
    message: str
    timestamp: datetime
    database: str
