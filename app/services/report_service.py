import logging
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool

from app.core.exceptions import ReportAPIError, ValidationError
from app.models.report import Report, ReportStatus, REQUIRED_FIELDS, validate_report_fields
from app.services.photo_store import PhotoStore
from app.services.report_store import ReportStore

logger = logging.getLogger(__name__)


class PhotoUpload:
    """Foto recibida junto con el formulario del reporte."""

    def __init__(self, data: bytes, filename: Optional[str], content_type: Optional[str]):
        self.data = data
        self.filename = filename
        self.content_type = content_type


class ReportService:
    """Reglas de negocio de los reportes: validación, foto y persistencia."""

    def __init__(self, store: ReportStore, photos: PhotoStore, delete_photos: bool = True):
        self.store = store
        self.photos = photos
        self.delete_photos = delete_photos

    async def list_reports(self, status: Optional[str] = None, laboratory: Optional[str] = None) -> List[Report]:
        return await self.store.list_all(status=status, laboratory=laboratory)

    async def create_report(self, fields: dict, photo: Optional[PhotoUpload] = None) -> Report:
        # el status del cliente se ignora: todo reporte nace pendiente
        submission = {name: fields.get(name) for name in REQUIRED_FIELDS}
        errors = validate_report_fields(submission)
        if errors:
            missing = [name for name, value in submission.items() if not isinstance(value, str) or not value.strip()]
            # sin campos faltantes queda el mensaje genérico de ValidationError
            message = "Campos obligatorios: " + ", ".join(missing) if missing else None
            raise ValidationError(message, details=[e.to_dict() for e in errors])

        reported_at = fields.get("datetime")
        submission["datetime"] = reported_at.strip() if isinstance(reported_at, str) and reported_at.strip() else None
        submission["status"] = ReportStatus.PENDING.value
        submission["photo"] = None

        if photo is not None:
            submission["photo"] = await run_in_threadpool(
                self.photos.save, photo.data, photo.filename, photo.content_type
            )

        try:
            report_id = await self.store.insert(submission)
        except ReportAPIError:
            if submission["photo"]:
                await run_in_threadpool(self.photos.delete, submission["photo"])
            raise
        return await self.store.get(report_id)

    async def update_status(self, report_id: str, status) -> Report:
        return await self.store.update_status(report_id, status)

    async def delete_report(self, report_id: str) -> Report:
        report = await self.store.delete(report_id)
        if self.delete_photos and report.photo:
            try:
                await run_in_threadpool(self.photos.delete, report.photo)
            except OSError:
                logger.warning("No se pudo eliminar la foto %s", report.photo, exc_info=True)
        return report
