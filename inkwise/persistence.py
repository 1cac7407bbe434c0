"""
Persistence Layer

The service needs only a key-value collaborator: load(key) / save(key, value)
/ clear(key). Values are JSON documents.

- DatabaseStore: SQLModel table (PostgreSQL or SQLite) when DATABASE_URL is set
- MemoryStore: in-process fallback (state lost on restart), also used in tests

Loading never fails: absence or corruption reads back as None and the
sanitizer turns that into a fresh default session.
"""

from typing import Any, Dict, Optional, Protocol
import json

from sqlmodel import select

from inkwise import database
from inkwise.models import StoredValue, utc_now
from inkwise.settings import settings
from inkwise.state.sanitizer import IdFactory, default_state, reconcile
from inkwise.state.schemas import SessionState
from inkwise.utils.id_generator import generate_claim_id


class KeyValueStore(Protocol):
    async def load(self, key: str) -> Optional[Any]: ...

    async def save(self, key: str, value: Any) -> None: ...

    async def clear(self, key: str) -> None: ...


def _decode(raw: Optional[str], key: str) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        print(f"⚠️ Stored value for '{key}' is corrupt, ignoring it: {e}")
        return None


class MemoryStore:
    """Keeps JSON text in a dict, so values round-trip exactly like the database."""

    def __init__(self):
        self._values: Dict[str, str] = {}

    async def load(self, key: str) -> Optional[Any]:
        return _decode(self._values.get(key), key)

    async def save(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)

    async def clear(self, key: str) -> None:
        self._values.pop(key, None)

    def put_raw(self, key: str, raw: str) -> None:
        """Store text verbatim (used to simulate foreign or corrupt data)."""
        self._values[key] = raw


class DatabaseStore:
    """Stores JSON text in the stored_values table."""

    def __init__(self, session_maker):
        self._session_maker = session_maker

    async def _get(self, db, key: str) -> Optional[StoredValue]:
        result = await db.execute(select(StoredValue).where(StoredValue.key == key))
        return result.scalar_one_or_none()

    async def load(self, key: str) -> Optional[Any]:
        try:
            async with self._session_maker() as db:
                row = await self._get(db, key)
                raw = row.value_json if row else None
        except Exception as e:
            print(f"Failed to load value: {e}")
            return None
        return _decode(raw, key)

    async def save(self, key: str, value: Any) -> None:
        try:
            async with self._session_maker() as db:
                row = await self._get(db, key)
                if row is None:
                    row = StoredValue(key=key, value_json=json.dumps(value))
                else:
                    row.value_json = json.dumps(value)
                    row.updated_at = utc_now()
                db.add(row)
                await db.commit()
        except Exception as e:
            print(f"Failed to save value: {e}")
            raise

    async def clear(self, key: str) -> None:
        try:
            async with self._session_maker() as db:
                row = await self._get(db, key)
                if row is not None:
                    await db.delete(row)
                    await db.commit()
        except Exception as e:
            print(f"Failed to clear value: {e}")
            raise


# =============================================================================
# SESSION HELPERS
# =============================================================================

async def load_session(
    store: KeyValueStore,
    key: Optional[str] = None,
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    """Restore the session; anything missing or malformed becomes a default."""
    return reconcile(await store.load(key or settings.STORAGE_KEY), id_factory)


async def save_session(
    store: KeyValueStore,
    state: SessionState,
    key: Optional[str] = None,
) -> None:
    """Persist the canonical state (not the export envelope)."""
    await store.save(key or settings.STORAGE_KEY, state.to_dict())


async def reset_session(
    store: KeyValueStore,
    key: Optional[str] = None,
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    await store.clear(key or settings.STORAGE_KEY)
    return default_state(id_factory)


# =============================================================================
# STORE LIFECYCLE (global singleton)
# =============================================================================

store: Optional[KeyValueStore] = None


async def init_store() -> KeyValueStore:
    """
    Initialize the key-value store.
    
    Uses the database when DATABASE_URL is set, falls back to MemoryStore.
    Call this on application startup.
    """
    global store
    
    if database.engine is not None:
        print("🗄️ Initializing database...")
        await database.create_tables()
        store = DatabaseStore(database.async_session_maker)
        print("✅ Database store ready")
    else:
        print("⚠️ No DATABASE_URL - using in-memory store (state lost on restart)")
        store = MemoryStore()
    return store


async def close_store():
    """Dispose the database engine. Call this on application shutdown."""
    global store
    
    if database.engine is not None:
        await database.engine.dispose()
    store = None


def get_store() -> KeyValueStore:
    """FastAPI dependency returning the global store."""
    global store
    if store is None:
        # Fallback during early import or when lifespan did not run
        store = MemoryStore()
    return store
