import logging
from typing import Dict, List

from pymongo import DESCENDING

from jobboard.models import UserProfile
from jobboard.schemas import UserDocumentCreate
from .exceptions import UserNotFoundError
from .store import serialize_document, translate_store_errors, utcnow

logger = logging.getLogger(__name__)


class UserService:
    """Profiles in the `users` collection, keyed by the account id."""

    def __init__(self, db: object):
        self.db = db

    async def create_user_document(self, user_id: str, user_data: UserDocumentCreate) -> Dict[str, object]:
        now = utcnow()
        profile = UserProfile(**user_data.model_dump(), role="user", created_at=now, updated_at=now)
        document = profile.model_dump(exclude={"id"})
        document["_id"] = user_id

        async with translate_store_errors("create user document"):
            await self.db.users.replace_one({"_id": user_id}, document, upsert=True)

        logger.info(f"Created profile for user {user_id}")
        return {"success": True, "id": user_id}

    async def get_user_profile(self, user_id: str) -> UserProfile:
        async with translate_store_errors("fetch user profile"):
            doc = await self.db.users.find_one({"_id": user_id})
        if doc is None:
            raise UserNotFoundError(user_id=user_id)
        return UserProfile.model_validate(serialize_document(doc))

    async def get_all_users(self) -> List[UserProfile]:
        async with translate_store_errors("fetch users"):
            docs = await self.db.users.find({}, sort=[("created_at", DESCENDING)]).to_list(length=None)
        return [UserProfile.model_validate(serialize_document(doc)) for doc in docs]
