from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from port.user_repository import UserRepository
from utils.config import AuthConfig, load_config


@lru_cache(maxsize=1)
def get_auth_config() -> AuthConfig:
    """Load AuthConfig from the environment once per process."""
    return load_config()


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo(config: AuthConfig = Depends(get_auth_config)) -> UserRepository:
    return MongoUserRepository(_get_db(), timeout_seconds=config.store_timeout_seconds)
