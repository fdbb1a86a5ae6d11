"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    """Schema for creating an Admin or Closer account"""

    email: str
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: str
    objective: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    groupObjective: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        v = v.strip()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class PasswordChangeRequest(BaseModel):
    currentPassword: str
    newPassword: str = Field(min_length=1)


class ObjectiveUpdateRequest(BaseModel):
    objective: float = Field(ge=0, allow_inf_nan=False)


class AchievementRequest(BaseModel):
    amount: float = Field(allow_inf_nan=False)


class UserSummary(BaseModel):
    id: int
    email: str
    name: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserSummary


class RegisterResponse(BaseModel):
    userId: int
    message: str


class UserResponse(BaseModel):
    """Full profile as returned by GET /users/profile"""

    id: int
    email: str
    name: str
    role: str
    objective: float
    achieved: float
    percentComplete: float
    groupObjective: Optional[float] = None
    groupAchieved: Optional[float] = None
    groupPercentComplete: Optional[float] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class CloserSummary(BaseModel):
    id: int
    name: str
    email: str
    objective: float
    achieved: float
    percentComplete: float
