from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportStatus(str, Enum):
    PENDING = "pendente"
    IN_MAINTENANCE = "em_manutencao"
    COMPLETED = "concluido"

    @classmethod
    def values(cls) -> List[str]:
        return [s.value for s in cls]


# Campo de texto obligatorio -> longitud máxima
REQUIRED_FIELDS: Dict[str, int] = {
    "title": 100,
    "description": 500,
    "location": 100,
    "laboratory": 100,
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def validate_report_fields(data: Mapping[str, Any]) -> List[FieldError]:
    """Valida los campos de un reporte y devuelve la lista de errores.

    Una lista vacía significa que el reporte es válido. ``status`` solo se
    revisa si viene presente.
    """
    errors = []
    for field, max_length in REQUIRED_FIELDS.items():
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(FieldError(field, f"{field} es obligatorio"))
        elif not isinstance(value, str):
            errors.append(FieldError(field, f"{field} debe ser texto"))
        elif len(value.strip()) > max_length:
            errors.append(FieldError(field, f"{field} demasiado largo (máx. {max_length} caracteres)"))

    status = data.get("status")
    if status is not None and status not in ReportStatus.values():
        errors.append(FieldError("status", status_error_message()))
    return errors


def status_error_message() -> str:
    return "Status inválido. Use: " + ", ".join(ReportStatus.values())


def clean_report_fields(data: Mapping[str, Any]) -> Dict[str, str]:
    """Recorta espacios de los campos de texto obligatorios."""
    return {field: data[field].strip() for field in REQUIRED_FIELDS}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(BaseModel):
    """Reporte de equipo tal como se guarda en MongoDB."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: str
    location: str
    laboratory: str
    photo: Optional[str] = None
    reported_at: str = Field(alias="datetime")
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, value):
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @field_validator("reported_at", mode="before")
    @classmethod
    def _date_to_str(cls, value):
        # documentos antiguos guardan datetime como Date de BSON
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value):
        # MongoDB guarda fechas en UTC; sin tz_aware el driver las devuelve naive
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Report":
        return cls.model_validate(dict(document))
