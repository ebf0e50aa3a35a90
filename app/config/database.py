import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from app.config.settings import Settings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """Handle explícito de la conexión a MongoDB.

    Se construye al arrancar la aplicación, se guarda en ``app.state`` y se
    cierra en el apagado. Si recibe un cliente ya creado (p. ej. en tests),
    no lo cierra.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncIOMotorClient] = None):
        self.settings = settings
        self.client = client
        self._owns_client = client is None

    async def connect(self):
        if self.client is None:
            logger.info("Conectando a MongoDB (%s)", self.settings.MONGODB_DB)
            self.client = AsyncIOMotorClient(
                self.settings.MONGODB_URI,
                maxPoolSize=10,
                minPoolSize=1,
                connectTimeoutMS=self.settings.MONGODB_TIMEOUT_MS,
                serverSelectionTimeoutMS=self.settings.MONGODB_TIMEOUT_MS,
                tz_aware=True,
            )
        return self

    def close(self):
        if self.client is not None and self._owns_client:
            self.client.close()
            logger.info("Conexión a MongoDB cerrada")
        self.client = None

    @property
    def db(self):
        if self.client is None:
            raise RuntimeError("MongoDatabase no está conectada")
        return self.client[self.settings.MONGODB_DB]

    @property
    def equipments(self):
        return self.db.get_collection(self.settings.MONGODB_COLLECTION)

    async def ping(self) -> bool:
        try:
            await self.db.command("ping")
            return True
        except Exception as e:
            logger.warning("Ping a MongoDB falló: %s", e)
            return False


def get_database(request: Request) -> MongoDatabase:
    return request.app.state.database
