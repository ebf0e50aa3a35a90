"""Colección persistente de reportes de equipos (MongoDB vía motor)."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models.report import (
    Report,
    ReportStatus,
    clean_report_fields,
    status_error_message,
    utcnow,
    validate_report_fields,
)

logger = logging.getLogger(__name__)

# createdAt es la única clave de orden; _id desempata inserciones en el mismo milisegundo
LIST_SORT = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def _object_id(report_id: str) -> ObjectId:
    if not ObjectId.is_valid(report_id):
        raise NotFoundError()
    return ObjectId(report_id)


def _check_status(status: Any) -> str:
    if status not in ReportStatus.values():
        raise ValidationError(status_error_message(), details=[{"field": "status", "message": status_error_message()}])
    return status


class ReportStore:
    def __init__(self, collection):
        self.collection = collection

    async def ensure_indexes(self):
        try:
            await self.collection.create_index([("status", ASCENDING)])
            await self.collection.create_index([("laboratory", ASCENDING)])
            await self.collection.create_index([("createdAt", DESCENDING)])
        except PyMongoError as e:
            logger.exception("No se pudieron crear los índices")
            raise PersistenceError() from e

    async def insert(self, report: Mapping[str, Any]) -> str:
        """Valida y guarda un reporte nuevo; devuelve su id."""
        errors = validate_report_fields(report)
        if errors:
            raise ValidationError(details=[e.to_dict() for e in errors])

        now = utcnow()
        document = clean_report_fields(report)
        document.update({
            "photo": report.get("photo"),
            "datetime": report.get("datetime") or now.isoformat(),
            "status": report.get("status") or ReportStatus.PENDING.value,
            "createdAt": now,
            "updatedAt": now,
        })
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.exception("Error al insertar reporte")
            raise PersistenceError() from e
        logger.info("Reporte insertado con ID: %s", result.inserted_id)
        return str(result.inserted_id)

    async def get(self, report_id: str) -> Report:
        oid = _object_id(report_id)
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.exception("Error al buscar reporte %s", report_id)
            raise PersistenceError() from e
        if document is None:
            raise NotFoundError()
        return Report.from_document(document)

    async def list_all(self, status: Optional[str] = None, laboratory: Optional[str] = None) -> List[Report]:
        query: Dict[str, Any] = {}
        if status is not None:
            query["status"] = _check_status(status)
        if laboratory:
            query["laboratory"] = laboratory.strip()

        reports = []
        try:
            async for document in self.collection.find(query).sort(LIST_SORT):
                reports.append(Report.from_document(document))
        except PyMongoError as e:
            logger.exception("Error al listar reportes")
            raise PersistenceError() from e
        logger.debug("Reportes devueltos: %d", len(reports))
        return reports

    async def update_status(self, report_id: str, new_status: Any) -> Report:
        _check_status(new_status)
        oid = _object_id(report_id)
        try:
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {"status": new_status, "updatedAt": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.exception("Error al actualizar reporte %s", report_id)
            raise PersistenceError() from e
        if document is None:
            raise NotFoundError()
        logger.info("Reporte %s actualizado a %s", report_id, new_status)
        return Report.from_document(document)

    async def delete(self, report_id: str) -> Report:
        oid = _object_id(report_id)
        try:
            document = await self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.exception("Error al eliminar reporte %s", report_id)
            raise PersistenceError() from e
        if document is None:
            raise NotFoundError()
        logger.info("Reporte %s eliminado de MongoDB", report_id)
        return Report.from_document(document)
