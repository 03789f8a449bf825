"""
Database connection and Beanie ODM initialization.

Beanie is an async ODM for MongoDB built on Motor and Pydantic.
We initialize it once at startup and close at shutdown; the Motor client is
the single process-wide handle and owns the connection pool.
"""

import logging
from typing import List, Optional, Type

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import get_settings
from app.models.company import Company
from app.models.job import Job
from app.models.lookup import Industry, Service, Skill, Specialty
from app.models.user import User

logger = logging.getLogger(__name__)

# Document models that Beanie will manage (collections + indexes)
DOCUMENT_MODELS: List[Type] = [User, Company, Job, Skill, Specialty, Service, Industry]

_client: Optional[AsyncIOMotorClient] = None


async def connect_to_mongo(client: Optional[AsyncIOMotorClient] = None) -> None:
    """
    Create (or adopt) a Motor client and initialize Beanie with document models.
    Called once at application startup.
    """
    global _client
    settings = get_settings()
    _client = client if client is not None else AsyncIOMotorClient(settings.mongodb_url)
    database = _client[settings.mongodb_database]

    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info("MongoDB connection established; Beanie initialized (db=%s).", settings.mongodb_database)


async def close_mongo_connection() -> None:
    """Close the Motor client on application shutdown."""
    global _client
    if _client is None:
        return
    logger.info("Closing MongoDB connection.")
    _client.close()
    _client = None
