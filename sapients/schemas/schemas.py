"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from sapients.models.activity_log import TargetKind
from sapients.models.module import Module
from sapients.models.role import Role


# ---- Auth ----
class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

class SuccessResponse(BaseModel):
    success: bool = True


# ---- Session ----
class SessionUser(BaseModel):
    """Projection of a user safe to hand out of the session layer."""
    id: str
    name: str
    email: str
    role: Role
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True

class SessionInfo(BaseModel):
    user: SessionUser
    expires: datetime

class LoginResponse(BaseModel):
    success: bool = True
    user: SessionUser


# ---- Access ----
class AccessSummary(BaseModel):
    role: Role
    role_label: str
    level: int
    visible_modules: List[Module]
    editable_modules: List[Module]
    can_delete: bool
    can_upload: bool
    can_approve_thoughts: bool

class ModuleAccess(BaseModel):
    module: Module
    can_view: bool
    can_edit: bool
    can_comment: bool

class DeleteCheckRequest(BaseModel):
    confirm_password: str = ""


# ---- Pages ----
class PageContext(BaseModel):
    page: str
    user: Optional[SessionUser] = None
    can_edit: bool = False
    navigation: List[Module] = []


# ---- Activity ----
class ActivityTargetOut(BaseModel):
    kind: TargetKind
    id: str

class ActivityOut(BaseModel):
    id: int
    actor_id: Optional[str] = None
    action: str
    target: Optional[ActivityTargetOut] = None
    created_at: Optional[datetime] = None
