"""Tenant storage port and its implementations.

Each studio's collections are persisted verbatim as JSON documents keyed by
the studio slug. Saves are optimistic: the state carries the version it was
loaded with and a save against a newer stored version is rejected with
``StaleState`` instead of overwriting another operator's change.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import NotFound, StaleState, ValidationError
from src.modules.studios.models import Studio, StudioCollection
from src.modules.studios.state import COLLECTIONS, TenantState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _dump_collections(state: TenantState) -> dict[str, Any]:
    document = state.model_dump(mode="json", by_alias=True)
    return {name: document[name] for name in COLLECTIONS}


def _build_state(version: int, collections: dict[str, Any]) -> TenantState:
    return TenantState.model_validate({"version": version, **collections})


class TenantStore(ABC):
    """Load/save a tenant's data set as a unit."""

    @abstractmethod
    async def exists(self, tenant_key: str) -> bool: ...

    @abstractmethod
    async def load(self, tenant_key: str) -> TenantState: ...

    @abstractmethod
    async def save(self, tenant_key: str, state: TenantState) -> TenantState:
        """Persist ``state`` and return it with the new version."""

    @abstractmethod
    async def create(self, tenant_key: str, state: TenantState) -> TenantState: ...


class InMemoryTenantStore(TenantStore):
    def __init__(self) -> None:
        self._documents: dict[str, tuple[int, dict[str, Any]]] = {}

    async def exists(self, tenant_key: str) -> bool:
        return tenant_key in self._documents

    async def load(self, tenant_key: str) -> TenantState:
        if tenant_key not in self._documents:
            raise NotFound("Studio not found")
        version, collections = self._documents[tenant_key]
        return _build_state(version, copy.deepcopy(collections))

    async def save(self, tenant_key: str, state: TenantState) -> TenantState:
        if tenant_key not in self._documents:
            raise NotFound("Studio not found")
        stored_version, _ = self._documents[tenant_key]
        if stored_version != state.version:
            logger.warning("Rejected stale save for %s (have %s, stored %s)", tenant_key, state.version, stored_version)
            raise StaleState()
        self._documents[tenant_key] = (stored_version + 1, _dump_collections(state))
        return state.model_copy(update={"version": stored_version + 1})

    async def create(self, tenant_key: str, state: TenantState) -> TenantState:
        if tenant_key in self._documents:
            raise ValidationError("A studio with this slug already exists")
        self._documents[tenant_key] = (0, _dump_collections(state))
        return state.model_copy(update={"version": 0})


class SqlTenantStore(TenantStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, tenant_key: str) -> bool:
        return await self._get_studio(tenant_key) is not None

    async def load(self, tenant_key: str) -> TenantState:
        studio = await self._require_studio(tenant_key)
        rows = await self._get_collections(studio.studio_id)
        return _build_state(studio.version, {row.name: row.payload for row in rows})

    async def save(self, tenant_key: str, state: TenantState) -> TenantState:
        studio = await self._require_studio(tenant_key)
        stmt = (
            update(Studio)
            .where(Studio.studio_id == studio.studio_id, Studio.version == state.version)
            .values(version=Studio.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            await self.db.rollback()
            logger.warning("Rejected stale save for %s at version %s", tenant_key, state.version)
            raise StaleState()

        rows = {row.name: row for row in await self._get_collections(studio.studio_id)}
        for name, payload in _dump_collections(state).items():
            row = rows.get(name)
            if row is None:
                self.db.add(StudioCollection(studio_id=studio.studio_id, name=name, payload=payload))
            else:
                row.payload = payload
        await self.db.commit()
        return state.model_copy(update={"version": state.version + 1})

    async def create(self, tenant_key: str, state: TenantState) -> TenantState:
        if await self.exists(tenant_key):
            raise ValidationError("A studio with this slug already exists")
        studio = Studio(slug=tenant_key, version=0)
        self.db.add(studio)
        await self.db.flush()
        for name, payload in _dump_collections(state).items():
            self.db.add(StudioCollection(studio_id=studio.studio_id, name=name, payload=payload))
        await self.db.commit()
        logger.info("Registered studio %s", tenant_key)
        return state.model_copy(update={"version": 0})

    async def _get_studio(self, tenant_key: str) -> Studio | None:
        stmt = select(Studio).where(Studio.slug == tenant_key).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _require_studio(self, tenant_key: str) -> Studio:
        studio = await self._get_studio(tenant_key)
        if studio is None:
            raise NotFound("Studio not found")
        return studio

    async def _get_collections(self, studio_id: str) -> list[StudioCollection]:
        stmt = (
            select(StudioCollection)
            .where(StudioCollection.studio_id == studio_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())


async def apply_change(
    store: TenantStore,
    tenant_key: str,
    change: Callable[[TenantState], tuple[TenantState, T]],
) -> T:
    """Load, apply a pure change and save; nothing is written if ``change`` raises."""
    state = await store.load(tenant_key)
    new_state, result = change(state)
    if new_state is not state:
        await store.save(tenant_key, new_state)
    return result
