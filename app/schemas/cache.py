from typing import List

from pydantic import BaseModel


class CacheEntryStatsRead(BaseModel):
    key: str
    hit_count: int
    age_ms: float


class CacheStatsResponse(BaseModel):
    size: int
    hit_rate: float
    entries: List[CacheEntryStatsRead]
    max_size: int
    ttl: str


class CacheClearResponse(BaseModel):
    message: str
