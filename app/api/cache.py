import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_qr_cache
from app.core.cache_utils import QRCodeCache, describe_ttl
from app.schemas.cache import CacheClearResponse, CacheEntryStatsRead, CacheStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# NOTE: no auth on these endpoints yet; same as the rest of the API.
@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: QRCodeCache = Depends(get_qr_cache)) -> CacheStatsResponse:
    stats = cache.get_stats()
    return CacheStatsResponse(
        size=stats.size,
        hit_rate=stats.hit_rate,
        entries=[
            CacheEntryStatsRead(key=item.key_preview, hit_count=item.hit_count, age_ms=item.age_ms)
            for item in stats.entries
        ],
        max_size=cache.max_size,
        ttl=describe_ttl(cache.ttl_ms),
    )


@router.post("/cache/clear", response_model=CacheClearResponse)
async def clear_cache(cache: QRCodeCache = Depends(get_qr_cache)) -> CacheClearResponse:
    cache.clear()
    logger.info("QR cache cleared")
    return CacheClearResponse(message="Cache cleared successfully")
