# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
from time import perf_counter
from fastapi import APIRouter, Depends, HTTPException
from weatherdash.api.deps import get_store
from weatherdash.db.kv_store import KeyValueStore
from weatherdash.services.history_cache import STORAGE_KEY

"""
Diagnóstico do armazenamento local.


- `GET /health/store` verifica leitura no armazenamento chave‑valor e mede latência.
- Trata erros com 503.
"""

router = APIRouter(tags=["Health"])

@router.get("/health/store")
async def health_store(store: KeyValueStore = Depends(get_store)):
    """
    Lê o documento do cache histórico e informa se existe e seu tamanho.
    """
    try:
        t0 = perf_counter()
        raw = await store.get(STORAGE_KEY)
        latency_ms = (perf_counter() - t0) * 1000.0

        return {
            "store": "ok",
            "latency_ms": round(latency_ms, 2),
            "history_cache_present": raw is not None,
            "history_cache_bytes": len(raw) if raw else 0,
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail={"store": "error", "type": e.__class__.__name__, "message": str(e)},
        )
