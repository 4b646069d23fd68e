"""FastAPI dependencies for authentication and tenant storage."""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.core.security import TokenDecodeError, decode_access_token
from src.modules.studios.store import SqlTenantStore, TenantStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(db: AsyncSession = Depends(get_db)) -> TenantStore:
    return SqlTenantStore(db)


async def get_current_tenant(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    store: TenantStore = Depends(get_store),
) -> str:
    """Return the tenant key (studio slug) of the authenticated operator."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing authentication")
    try:
        payload = decode_access_token(credentials.credentials)
    except TokenDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    tenant_key = payload.get("sub")
    if not tenant_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    if not await store.exists(tenant_key):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Studio disabled")
    return tenant_key
