"""Read-only view of the client cache for operational triage."""

from fastapi import APIRouter, Request

from secrets_operator.schemas.cache import CacheKeysResponse

router = APIRouter()


@router.get("/keys", response_model=CacheKeysResponse)
def list_cache_keys(request: Request) -> CacheKeysResponse:
    """Return the keys of all cached clients (no client data)."""
    cache = getattr(request.app.state, "client_cache", None)
    if cache is None:
        return CacheKeysResponse(count=0)
    keys = cache.keys()
    return CacheKeysResponse(
        count=len(keys),
        keys=[str(k) for k in keys],
        clones=sum(1 for k in keys if k.is_clone()),
    )
