"""Access API router — what the current user may see and do."""

from fastapi import APIRouter, Depends

from sapients.core.guards import check_delete, check_view, enforce_api, require_user
from sapients.core.permissions import (
    can_approve_thoughts, can_comment, can_delete, can_edit, can_upload,
    editable_modules, format_role, role_level, visible_modules,
)
from sapients.models.module import Module
from sapients.schemas.schemas import (
    AccessSummary, DeleteCheckRequest, ModuleAccess, SessionUser, SuccessResponse,
)

router = APIRouter(prefix="/access", tags=["access"])


@router.get("", response_model=AccessSummary)
async def access_summary(user: SessionUser = Depends(require_user)):
    """Role, level and module grants of the current user (drives navigation)."""
    return AccessSummary(
        role=user.role,
        role_label=format_role(user.role),
        level=role_level(user.role),
        visible_modules=list(visible_modules(user.role)),
        editable_modules=list(editable_modules(user.role)),
        can_delete=can_delete(user.role),
        can_upload=can_upload(user.role),
        can_approve_thoughts=can_approve_thoughts(user.role),
    )


@router.post("/delete-check", response_model=SuccessResponse)
async def delete_check(
    body: DeleteCheckRequest,
    user: SessionUser = Depends(require_user),
):
    """Confirm the caller may perform destructive operations."""
    enforce_api(check_delete(user, body.confirm_password))
    return SuccessResponse()


@router.get("/{module}", response_model=ModuleAccess)
async def module_access(module: Module, user: SessionUser = Depends(require_user)):
    """Per-module grants; 403 when the module is not visible at all."""
    enforce_api(check_view(user, module))
    return ModuleAccess(
        module=module,
        can_view=True,
        can_edit=can_edit(user.role, module),
        can_comment=can_comment(user.role, module),
    )
