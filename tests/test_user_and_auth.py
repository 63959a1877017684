from datetime import datetime, timedelta, timezone

import jwt
import pytest

from jobboard.schemas import SignUpRequest, UserDocumentCreate
from jobboard.services import (
    AlreadyExistsError,
    AuthService,
    UnauthenticatedError,
    UserNotFoundError,
    UserService,
)

SECRET = "test-signing-key-with-at-least-32-bytes"


def profile(email="ada@example.com", **overrides):
    data = {
        "email": email,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "gender": "female",
        "country": "United Kingdom",
        "language": "en",
    }
    data.update(overrides)
    return data


class TestUserService:
    @pytest.mark.asyncio
    async def test_create_and_fetch_profile(self, db):
        service = UserService(db)
        result = await service.create_user_document("uid-1", UserDocumentCreate(**profile()))

        assert result == {"success": True, "id": "uid-1"}
        user = await service.get_user_profile("uid-1")
        assert user.id == "uid-1"
        assert user.role == "user"
        assert user.email == "ada@example.com"
        assert user.created_at == user.updated_at

    @pytest.mark.asyncio
    async def test_missing_profile(self, db):
        with pytest.raises(UserNotFoundError) as exc_info:
            await UserService(db).get_user_profile("ghost")
        assert exc_info.value.message == "User profile not found"

    @pytest.mark.asyncio
    async def test_all_users_newest_first(self, db):
        for index, user_id in enumerate(["first", "second", "third"]):
            await db.users.insert_one(
                {"_id": user_id, **profile(f"{user_id}@example.com"),
                 "role": "user", "created_at": datetime(2025, 1, 1 + index)}
            )

        users = await UserService(db).get_all_users()
        assert [u.id for u in users] == ["third", "second", "first"]


class TestAuthService:
    def signup(self, email="ada@example.com", password="s3cret!"):
        return SignUpRequest(**profile(email), password=password)

    @pytest.mark.asyncio
    async def test_sign_up_creates_account_and_profile(self, db):
        service = AuthService(db, secret=SECRET)
        auth = await service.sign_up(self.signup())

        assert service.verify_token(auth.access_token) == auth.user_id
        account = await db.accounts.find_one({"_id": auth.user_id})
        assert account["password_hash"] != "s3cret!"
        user = await UserService(db).get_user_profile(auth.user_id)
        assert user.first_name == "Ada"

    @pytest.mark.asyncio
    async def test_email_must_be_unique(self, db):
        service = AuthService(db, secret=SECRET)
        await service.sign_up(self.signup())

        with pytest.raises(AlreadyExistsError):
            await service.sign_up(self.signup(email="ADA@example.com"))
        assert await db.users.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_sign_in(self, db):
        service = AuthService(db, secret=SECRET)
        created = await service.sign_up(self.signup())

        auth = await service.sign_in("Ada@Example.com", "s3cret!")
        assert auth.user_id == created.user_id

        with pytest.raises(UnauthenticatedError):
            await service.sign_in("ada@example.com", "wrong")
        with pytest.raises(UnauthenticatedError):
            await service.sign_in("nobody@example.com", "s3cret!")

    def test_rejects_bad_tokens(self):
        service = AuthService(None, secret=SECRET)
        expired = jwt.encode(
            {"sub": "uid", "exp": int((datetime.now(timezone.utc) - timedelta(minutes=1)).timestamp())},
            SECRET,
            algorithm="HS256",
        )
        forged = jwt.encode({"sub": "uid"}, "another-signing-key-with-32-plus-bytes", algorithm="HS256")

        for token in ("", "garbage", expired, forged):
            with pytest.raises(UnauthenticatedError):
                service.verify_token(token)
