# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from __future__ import annotations
from typing import Optional, Protocol
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

"""
Armazenamento chave‑valor local (um documento JSON por chave).


- Chaves usadas: `weather-history-cache`, `weather-preferences`, `theme`.
- `set()` sobrescreve o valor inteiro (sem merge incremental na camada de armazenamento).
"""


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


class SqlKeyValueStore:
    """Implementação sobre a tabela `kv_store` (ver `db.session.create_schema`)."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def get(self, key: str) -> Optional[str]:
        async with self._sessions() as db:
            row = await db.execute(text("SELECT value FROM kv_store WHERE key = :k"), {"k": key})
            return row.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        async with self._sessions() as db:
            await db.execute(text("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (:k, :v, CURRENT_TIMESTAMP)
                ON CONFLICT (key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """), {"k": key, "v": value})
            await db.commit()

    async def delete(self, key: str) -> None:
        async with self._sessions() as db:
            await db.execute(text("DELETE FROM kv_store WHERE key = :k"), {"k": key})
            await db.commit()
