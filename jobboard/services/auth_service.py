import logging
from typing import Optional

import jwt
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from jobboard.core.config import settings
from jobboard.models import Account
from jobboard.schemas import AuthResponse, SignUpRequest, UserDocumentCreate
from .exceptions import AlreadyExistsError, JobBoardError, UnauthenticatedError
from .store import serialize_document, translate_store_errors, utcnow
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Email/password accounts with bcrypt hashes and HS256 bearer tokens."""

    def __init__(self, db: object, secret: Optional[str] = None, expire_minutes: Optional[int] = None):
        self.db = db
        self.user_service = UserService(db)
        self.secret = secret or settings.JWT_SECRET_KEY
        self.expire_minutes = expire_minutes or settings.JWT_EXPIRE_MINUTES

    async def sign_up(self, payload: SignUpRequest) -> AuthResponse:
        """
        Create the account and its profile, then sign the user in.

        Raises:
            AlreadyExistsError: If an account already uses this email
        """
        email = payload.email.lower()
        account = Account(
            id=str(ObjectId()),
            email=email,
            password_hash=Account.generate_hash(payload.password),
            created_at=utcnow(),
        )
        document = account.model_dump(exclude={"id"})
        document["_id"] = account.id

        async with translate_store_errors("sign up"):
            try:
                await self.db.accounts.insert_one(document)
            except DuplicateKeyError as e:
                raise AlreadyExistsError("An account with this email already exists") from e

        profile = UserDocumentCreate(**payload.model_dump(exclude={"password", "email"}), email=email)
        try:
            await self.user_service.create_user_document(account.id, profile)
        except JobBoardError:
            try:
                await self.db.accounts.delete_one({"_id": account.id})
            except PyMongoError:
                logger.error(f"Could not remove account {account.id} after profile creation failed", exc_info=True)
            raise

        logger.info(f"Signed up user {account.id}")
        return AuthResponse(user_id=account.id, access_token=account.generate_jwt(self.secret, self.expire_minutes))

    async def sign_in(self, email: str, password: str) -> AuthResponse:
        async with translate_store_errors("sign in"):
            doc = await self.db.accounts.find_one({"email": email.lower()})

        if doc is None:
            raise UnauthenticatedError("Invalid email or password")
        account = Account.model_validate(serialize_document(doc))
        if not account.valid_password(password):
            raise UnauthenticatedError("Invalid email or password")

        return AuthResponse(user_id=account.id, access_token=account.generate_jwt(self.secret, self.expire_minutes))

    def verify_token(self, token: str) -> str:
        """Return the user id carried by a bearer token."""
        if not token:
            raise UnauthenticatedError()
        try:
            payload = jwt.decode(token, self.secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError as e:
            raise UnauthenticatedError("Your session has expired, please sign in again.") from e
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError("Invalid authentication token") from e

        user_id = payload.get("sub")
        if not user_id:
            raise UnauthenticatedError("Invalid authentication token")
        return user_id
