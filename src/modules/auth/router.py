"""Operator authentication routes (mock credential check)."""

from fastapi import APIRouter, Depends, HTTPException, status

from src.core.deps import get_store
from src.core.security import create_access_token, verify_access_code
from src.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse
from src.modules.studios.service import register_studio
from src.modules.studios.store import TenantStore

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, store: TenantStore = Depends(get_store)) -> TokenResponse:
    """Create a studio with the default settings and catalogue."""
    if not verify_access_code(payload.access_code):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid access code")
    slug = payload.slug.strip().lower()
    state = await register_studio(store, slug, payload.business_name.strip())
    return TokenResponse(token=create_access_token(slug), studio=state.settings)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, store: TenantStore = Depends(get_store)) -> TokenResponse:
    slug = payload.slug.strip().lower()
    if not verify_access_code(payload.access_code) or not await store.exists(slug):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid studio or access code")
    state = await store.load(slug)
    return TokenResponse(token=create_access_token(slug), studio=state.settings)
