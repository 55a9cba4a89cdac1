"""Page routes — page-context guards with redirects, returning page context only."""

from typing import Optional

from fastapi import APIRouter, Depends

from sapients.core.guards import current_user, require_page_edit, require_page_view
from sapients.core.permissions import can_edit, visible_modules
from sapients.models.module import Module
from sapients.schemas.schemas import PageContext, SessionUser

router = APIRouter(tags=["pages"])


def _context(page: str, user: SessionUser, module: Module) -> PageContext:
    return PageContext(
        page=page,
        user=user,
        can_edit=can_edit(user.role, module),
        navigation=list(visible_modules(user.role)),
    )


@router.get("/login", response_model=PageContext)
async def login_page(user: Optional[SessionUser] = Depends(current_user)):
    """Anonymous entry point."""
    return PageContext(page="login", user=user)


def _register_module_pages(module: Module) -> None:
    slug = module.value

    @router.get(f"/{slug}", response_model=PageContext, name=f"{module.name.lower()}_page")
    async def module_page(user: SessionUser = Depends(require_page_view(module))):
        return _context(slug, user, module)

    if module is Module.DASHBOARD:
        return

    @router.get(f"/{slug}/new", response_model=PageContext, name=f"{module.name.lower()}_new_page")
    async def module_new_page(user: SessionUser = Depends(require_page_edit(module))):
        return _context(f"{slug}/new", user, module)


for _module in Module:
    _register_module_pages(_module)
