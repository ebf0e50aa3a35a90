from fastapi import Depends, Request

from app.config.database import MongoDatabase, get_database
from app.config.settings import Settings
from app.services.photo_store import PhotoStore
from app.services.report_service import ReportService
from app.services.report_store import ReportStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_photo_store(request: Request) -> PhotoStore:
    return request.app.state.photo_store


def get_report_store(database: MongoDatabase = Depends(get_database)) -> ReportStore:
    return ReportStore(database.equipments)


def get_report_service(
    store: ReportStore = Depends(get_report_store),
    photos: PhotoStore = Depends(get_photo_store),
    settings: Settings = Depends(get_app_settings),
) -> ReportService:
    return ReportService(store, photos, delete_photos=settings.DELETE_PHOTOS_WITH_REPORT)
