"""MongoDB implementation of UserRepository."""

from datetime import date, timezone
from logging import getLogger

import pymongo
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, RepositoryError
from domain.model.user import User

logger = getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class MongoUserRepository:
    def __init__(self, db: Database, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.collection = db[USERS_COLLECTION_NAME]
        self.timeout_seconds = timeout_seconds

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', 1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        created_at = doc['created_at']
        if created_at.tzinfo is None:
            # PyMongo returns naive UTC datetimes unless the client is tz_aware
            created_at = created_at.replace(tzinfo=timezone.utc)
        return User(
            id=doc['_id'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            email=doc['email'],
            birth_date=date.fromisoformat(doc['birth_date']),
            password_hash=doc['password_hash'],
            created_at=created_at,
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.id,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
            'birth_date': user.birth_date.isoformat(),
            'password_hash': user.password_hash,
            'created_at': user.created_at,
        }

    def insert(self, user: User) -> None:
        """Insert a new user document. Email uniqueness is enforced by idx_users_email."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                self.collection.insert_one(self._to_document(user))
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"userId": user.id})
            raise DuplicateError("Email already registered")
        except PyMongoError as e:
            logger.error("Failed to insert user", extra={"userId": user.id, "error": str(e)})
            raise RepositoryError("Failed to insert user") from e
        logger.info("User created", extra={"userId": user.id})

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            raise RepositoryError("Failed to get user by email") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to get user by ID") from e
        return self._to_domain(doc) if doc else None

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID. Return True if a document was removed."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to delete user") from e
        if result.deleted_count > 0:
            logger.info("User deleted", extra={"userId": user_id})
            return True
        return False

    def list_all(self) -> list[User]:
        """Return every user, oldest first."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                docs = list(self.collection.find().sort('created_at', 1))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise RepositoryError("Failed to list users") from e
        return [self._to_domain(doc) for doc in docs]
