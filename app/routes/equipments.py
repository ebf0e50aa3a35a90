from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.dependencies.services import get_photo_store, get_report_service
from app.models.report import Report
from app.schemas.report import ReportCreated, ReportDeleted, ReportOut, ReportUpdated, StatusUpdate
from app.services.photo_store import PhotoStore
from app.services.report_service import PhotoUpload, ReportService

router = APIRouter()


def to_out(report: Report, photos: PhotoStore) -> ReportOut:
    return ReportOut.from_report(report, photos.url_for(report.photo) if report.photo else None)


@router.get("/equipments", response_model=List[ReportOut])
async def list_equipments(
    status_filter: Optional[str] = Query(None, alias="status"),
    laboratory: Optional[str] = None,
    service: ReportService = Depends(get_report_service),
    photos: PhotoStore = Depends(get_photo_store),
):
    reports = await service.list_reports(status=status_filter, laboratory=laboratory)
    return [to_out(r, photos) for r in reports]


@router.post("/equipments", response_model=ReportCreated, status_code=status.HTTP_201_CREATED)
async def create_equipment(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    laboratory: Optional[str] = Form(None),
    datetime: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    service: ReportService = Depends(get_report_service),
    photos: PhotoStore = Depends(get_photo_store),
):
    upload = None
    if photo is not None and photo.filename:
        # un byte más que el máximo basta para detectar archivos demasiado grandes
        data = await photo.read(photos.max_size + 1)
        upload = PhotoUpload(data, photo.filename, photo.content_type)

    fields = {
        "title": title,
        "description": description,
        "location": location,
        "laboratory": laboratory,
        "datetime": datetime,
    }
    report = await service.create_report(fields, upload)
    return ReportCreated(message="Equipo reportado con éxito", equipment=to_out(report, photos))


@router.put("/equipments/{report_id}", response_model=ReportUpdated)
async def update_equipment_status(
    report_id: str,
    update: StatusUpdate,
    service: ReportService = Depends(get_report_service),
    photos: PhotoStore = Depends(get_photo_store),
):
    report = await service.update_status(report_id, update.status)
    return ReportUpdated(message="Status actualizado con éxito", equipment=to_out(report, photos))


@router.delete("/equipments/{report_id}", response_model=ReportDeleted)
async def delete_equipment(
    report_id: str,
    service: ReportService = Depends(get_report_service),
    photos: PhotoStore = Depends(get_photo_store),
):
    report = await service.delete_report(report_id)
    return ReportDeleted(message="Equipo eliminado con éxito", deleted_equipment=to_out(report, photos))
