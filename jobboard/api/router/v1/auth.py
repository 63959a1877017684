from fastapi import APIRouter, Depends, status

from jobboard.api.dependencies import get_auth_service, get_current_user_id, get_user_service
from jobboard.models import UserProfile
from jobboard.schemas import AuthResponse, SignInRequest, SignUpRequest
from jobboard.services import AuthService, UserService

auth_router = APIRouter()


@auth_router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(payload: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    return await service.sign_up(payload)


@auth_router.post("/signin", response_model=AuthResponse)
async def sign_in(payload: SignInRequest, service: AuthService = Depends(get_auth_service)):
    return await service.sign_in(payload.email, payload.password)


@auth_router.get("/me", response_model=UserProfile)
async def current_user(
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return await service.get_user_profile(user_id)
