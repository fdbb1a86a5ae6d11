"""User router - login, registration, profile and Closer bookkeeping"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_admin, require_closer
from ...database import get_db
from ...models import User
from ..clients.router import client_to_response
from ..clients.schemas import ClientResponse
from ..meetings.router import meeting_to_response
from ..meetings.schemas import MeetingResponse
from .schemas import (
    AchievementRequest,
    CloserSummary,
    LoginRequest,
    LoginResponse,
    ObjectiveUpdateRequest,
    PasswordChangeRequest,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    UserSummary,
)
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        objective=user.objective or 0,
        achieved=user.achieved or 0,
        percentComplete=user.percent_complete or 0,
        groupObjective=user.group_objective,
        groupAchieved=user.group_achieved,
        groupPercentComplete=user.group_percent_complete,
        createdAt=user.created_at,
        updatedAt=user.updated_at,
    )


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """Authenticate with email and password; returns a 24h bearer token"""
    token, user = service.authenticate(data.email, data.password)
    return LoginResponse(
        token=token,
        user=UserSummary(id=user.id, email=user.email, name=user.name, role=user.role),
    )


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    data: RegisterRequest,
    _admin: Identity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Create an Admin or Closer account (ADMIN only)"""
    user = service.register(data)
    return RegisterResponse(userId=user.id, message="User created")


@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    return user_to_response(service.get_profile(identity.user_id))


@router.put("/password")
def change_password(
    data: PasswordChangeRequest,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    service.change_password(identity.user_id, data.currentPassword, data.newPassword)
    return {"message": "Password updated"}


@router.put("/objective")
def update_objective(
    data: ObjectiveUpdateRequest,
    identity: Identity = Depends(require_closer),
    service: UserService = Depends(get_user_service),
):
    service.set_objective(identity.user_id, data.objective)
    return {"message": "Objective updated"}


@router.post("/achievement")
def add_achievement(
    data: AchievementRequest,
    identity: Identity = Depends(require_closer),
    service: UserService = Depends(get_user_service),
):
    service.add_achievement(identity.user_id, data.amount)
    return {"message": "Achievement updated"}


@router.get("/clients", response_model=list[ClientResponse])
def list_my_clients(
    identity: Identity = Depends(require_closer),
    service: UserService = Depends(get_user_service),
):
    """Clients of the calling Closer, most recently updated first"""
    return [client_to_response(c) for c in service.list_clients(identity.user_id)]


@router.get("/meetings", response_model=list[MeetingResponse])
def list_my_meetings(
    identity: Identity = Depends(require_closer),
    service: UserService = Depends(get_user_service),
):
    return [meeting_to_response(m) for m in service.list_meetings(identity.user_id)]


@router.get("/closers", response_model=list[CloserSummary])
def list_closers(
    _admin: Identity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Every Closer with its objective progress (ADMIN only)"""
    return [
        CloserSummary(
            id=u.id,
            name=u.name,
            email=u.email,
            objective=u.objective or 0,
            achieved=u.achieved or 0,
            percentComplete=u.percent_complete or 0,
        )
        for u in service.list_closers()
    ]
