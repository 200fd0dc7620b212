# apps/api/src/core/database.py
import logging

from prisma import Prisma

logger = logging.getLogger(__name__)

# Global Prisma instance shared by every request
prisma = Prisma()


async def connect_db() -> None:
    if not prisma.is_connected():
        await prisma.connect()
        logger.info("Database connection established")


async def disconnect_db() -> None:
    if prisma.is_connected():
        await prisma.disconnect()
        logger.info("Database connection closed")


async def get_db() -> Prisma:
    """Database dependency for FastAPI dependency injection."""
    return prisma
