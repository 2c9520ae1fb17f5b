# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession

"""
Sessão assíncrona do armazenamento local via SQLAlchemy 2.0.


- Cria `engine` async (SQLite local via `aiosqlite` por padrão).
- Garante URL com driver assíncrono (`+aiosqlite`, `+asyncpg`).
- `create_schema()` cria a tabela chave‑valor `kv_store` se não existir.
"""

ASYNC_DRIVERS = ("sqlite+aiosqlite://", "postgresql+asyncpg://")


def make_engine(database_url: str) -> AsyncEngine:
    if not database_url.startswith(ASYNC_DRIVERS):
        raise RuntimeError("DATABASE_URL deve usar driver assíncrono ('sqlite+aiosqlite://' ou 'postgresql+asyncpg://').")
    return create_async_engine(database_url, echo=False, future=True)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.execute(text("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key        VARCHAR(128) PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))
