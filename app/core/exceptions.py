"""Excepciones de dominio de la API de reportes de equipos.

Los servicios las lanzan; solo la capa HTTP (``app/core/handlers.py``) las
convierte en respuestas.
"""
from typing import List, Optional


class ReportAPIError(Exception):
    """Error base de la aplicación."""

    status_code = 500
    message = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ReportAPIError):
    """Campos faltantes, demasiado largos o status fuera del enum."""

    status_code = 400
    message = "Datos de entrada inválidos"

    def __init__(self, message: Optional[str] = None, details: Optional[List[dict]] = None):
        super().__init__(message)
        self.details = details or []


class NotFoundError(ReportAPIError):
    status_code = 404
    message = "Equipo no encontrado"


class InvalidFileTypeError(ReportAPIError):
    status_code = 400
    message = "Solo se permiten imágenes"


class FileTooLargeError(ReportAPIError):
    status_code = 400
    message = "Archivo demasiado grande"


class PersistenceError(ReportAPIError):
    status_code = 500
    message = "Error al acceder a la base de datos"
