"""
Authentication router
Login, logout and the signed-in user's profile
"""
from fastapi import APIRouter, Depends

from routers.deps import get_auth_service, get_current_user
from schemas.auth import CurrentUser, LoginRequest, LoginResponse, MeResponse
from services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Owner / staff login; returns tokens and the resolved role"""
    return auth.login(credentials.email, credentials.password)


@router.post("/logout")
def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return {"message": "Signed out"}


@router.get("/me", response_model=MeResponse)
def me(current_user: CurrentUser = Depends(get_current_user),
       auth: AuthService = Depends(get_auth_service)):
    """Current user, role and profile"""
    return MeResponse(user=current_user, profile=auth.get_profile(current_user.id))
