"""Almacenamiento en disco de las fotos subidas con cada reporte."""
import io
import logging
import os
import re
import time
import uuid
from typing import Optional

from PIL import Image, UnidentifiedImageError

from app.core.exceptions import FileTooLargeError, InvalidFileTypeError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 5 * 1024 * 1024  # 5MB
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(name: Optional[str]) -> str:
    base = os.path.basename((name or "").replace("\\", "/"))
    base = _UNSAFE_CHARS.sub("_", base).strip("._")
    return base[:100] or "photo"


class PhotoStore:
    def __init__(self, directory: str, url_prefix: str = "/uploads", max_size: int = DEFAULT_MAX_SIZE):
        self.directory = directory
        self.url_prefix = url_prefix.rstrip("/")
        self.max_size = max_size

    def init_directory(self):
        if not os.path.isdir(self.directory):
            os.makedirs(self.directory, exist_ok=True)
            logger.info("Directorio de uploads creado: %s", self.directory)

    def save(self, data: bytes, original_name: Optional[str], mime_type: Optional[str]) -> str:
        """Guarda la imagen y devuelve el nombre de archivo generado.

        Lanza ``InvalidFileTypeError`` si el tipo MIME no es ``image/*`` o si
        Pillow no reconoce el contenido, y ``FileTooLargeError`` si supera el
        tamaño máximo.
        """
        if not mime_type or not mime_type.lower().startswith("image/"):
            raise InvalidFileTypeError("Solo se permiten imágenes")
        if len(data) > self.max_size:
            raise FileTooLargeError(f"Archivo demasiado grande. Tamaño máximo: {self.max_size // (1024 * 1024)}MB")
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise InvalidFileTypeError("El archivo no es una imagen válida") from e

        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original_name)}"
        self.init_directory()
        # "xb" falla si el archivo ya existe: nunca se sobrescribe
        with open(self.path_for(filename), "xb") as f:
            f.write(data)
        logger.info("Foto guardada: %s (%d bytes, %s)", filename, len(data), mime_type)
        return filename

    def path_for(self, filename: str) -> str:
        return os.path.join(self.directory, os.path.basename(filename))

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def exists(self, filename: str) -> bool:
        return os.path.isfile(self.path_for(filename))

    def delete(self, filename: str) -> bool:
        try:
            os.remove(self.path_for(filename))
        except FileNotFoundError:
            return False
        logger.info("Foto eliminada: %s", filename)
        return True
