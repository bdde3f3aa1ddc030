"""
Tailor directory: active tailor contacts, served from an injected TTL cache.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from app.repositories.contact_repository import ContactRepository
from app.schemas.order import TailorResponse
from app.utils.cache import TTLCache

logger = logging.getLogger(__name__)

TAILORS_CACHE_KEY = "tailors"


class TailorDirectoryService:

    def __init__(self, db: Session, cache: TTLCache):
        self._repo = ContactRepository(db)
        self._cache = cache

    def get_tailors(self) -> List[TailorResponse]:
        cached = self._cache.get(TAILORS_CACHE_KEY)
        if cached is not None:
            return cached
        tailors = [TailorResponse.model_validate(c) for c in self._repo.list_active_tailors()]
        self._cache.set(TAILORS_CACHE_KEY, tailors)
        logger.debug("tailor_cache_refreshed", extra={"count": len(tailors)})
        return tailors

    def clear_cache(self) -> None:
        self._cache.invalidate(TAILORS_CACHE_KEY)
        logger.info("tailor_cache_cleared")
