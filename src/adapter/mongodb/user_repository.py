"""MongoDB implementation of UserRepository.

Reads let PyMongoError propagate so a database outage surfaces as a server
error instead of an empty list or a missing user. Writes report "nothing
matched" as False and a unique-index violation as EmailAlreadyTakenError.
"""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import EmailAlreadyTakenError
from domain.model.user import User

logger = getLogger(__name__)

EMAIL_INDEX = 'idx_users_email'
CREATED_AT_INDEX = 'idx_users_created_at'


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create the unique email index and the created_at sort index."""
        try:
            self.collection.create_index([('email', ASCENDING)], name=EMAIL_INDEX, unique=True)
            self.collection.create_index([('created_at', DESCENDING)], name=CREATED_AT_INDEX)
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False
        return True

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
        )

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> User | None:
        """Insert a user. None if the driver failed."""
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': uuid.uuid4().hex,
            'email': email,
            'password_hash': password_hash,
            'name': name,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation lost email race", extra={"email": email})
            raise EmailAlreadyTakenError("This email already taken")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_doc['_id'], "email": email})
        return self._to_domain(user_doc)

    def update(self, user_id: str, name: str, email: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'name': name, 'email': email, 'updated_at': datetime.now(timezone.utc)}}
            )
        except DuplicateKeyError:
            logger.warning("User update lost email race", extra={"userId": user_id, "email": email})
            raise EmailAlreadyTakenError("This email already taken")
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            return False

        return result.matched_count > 0

    def update_password(self, user_id: str, password_hash: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'password_hash': password_hash, 'updated_at': datetime.now(timezone.utc)}}
            )
        except PyMongoError as e:
            logger.error("Failed to update password", extra={"userId": user_id, "error": str(e)})
            return False

        return result.matched_count > 0

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            return False

        if result.deleted_count:
            logger.info("User deleted", extra={"userId": user_id})
        return result.deleted_count > 0

    def update_last_login(self, user_id: str) -> bool:
        """Stamp last_login. Failures are logged only; login still succeeds."""
        now = datetime.now(timezone.utc)
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False
        return result.modified_count > 0

    # ── read operations ──────────────────────────────────────

    def list_all(self) -> list[User]:
        cursor = self.collection.find({}).sort('created_at', DESCENDING)
        return [self._to_domain(doc) for doc in cursor]

    def get_by_email(self, email: str) -> User | None:
        doc = self.collection.find_one({'email': email})
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        doc = self.collection.find_one({'_id': user_id})
        return self._to_domain(doc) if doc else None
