"""Geopy backed geocoding backend.

Adds the ``address`` format on top of the standard formats:
- Supports two providers (ArcGIS, Nominatim) with fallback between them
- Enforces rate limiting to respect API quotas
- Caches results in Redis when ``REDIS_URL`` is configured
"""

import hashlib
import json
import logging
from typing import Any, Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import ArcGIS, Nominatim
from geopy.location import Location
from redis import Redis
from redis.exceptions import RedisError

from locref.core.config import Settings
from locref.core.geocoding.base import GeocodingBackend

logger = logging.getLogger(__name__)

PROVIDERS = ("arcgis", "nominatim")


class GeopyGeocodingBackend(GeocodingBackend):
    """Geocoding backend using geopy providers."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the backend from settings.

        Args:
            settings: Optional settings, defaults to the module level settings
        """
        super().__init__()
        if settings is None:
            from locref.core.config import settings
        self.settings = settings

        self.primary_provider = settings.GEOCODING_PROVIDER
        self.enable_fallback = settings.GEOCODING_ENABLE_FALLBACK
        self.timeout = settings.GEOCODING_TIMEOUT
        self.max_retries = settings.GEOCODING_MAX_RETRIES
        self.cache_ttl = settings.GEOCODING_CACHE_TTL

        # Caching configuration
        self.redis_client: Optional[Redis] = None
        if settings.REDIS_URL:
            try:
                self.redis_client = Redis.from_url(
                    settings.REDIS_URL, decode_responses=True
                )
                self.redis_client.ping()
                logger.info("Redis caching enabled for geocoding")
            except RedisError as e:
                logger.warning(f"Redis connection failed, caching disabled: {e}")
                self.redis_client = None

        self.geocoders = {
            "arcgis": ArcGIS(timeout=self.timeout),
            "nominatim": Nominatim(
                user_agent=settings.NOMINATIM_USER_AGENT, timeout=self.timeout
            ),
        }
        self.rate_limited = {
            provider: RateLimiter(
                geocoder.geocode,
                min_delay_seconds=settings.GEOCODING_RATE_LIMIT,
                max_retries=self.max_retries,
                error_wait_seconds=5,
                swallow_exceptions=False,
            )
            for provider, geocoder in self.geocoders.items()
        }
        logger.info(
            f"Geopy backend initialized with {self.primary_provider} as primary provider"
        )

    def _get_cache_key(self, address: str, provider: str) -> str:
        """Generate cache key for geocoding result.

        Args:
            address: Address string to geocode
            provider: Geocoding provider name

        Returns:
            Cache key string
        """
        address_hash = hashlib.sha256(address.lower().encode()).hexdigest()
        return f"geocode:{provider}:{address_hash}"

    def _get_cached_result(self, address: str, provider: str) -> Optional[dict]:
        """Get cached geocoding result if available.

        Returns:
            Dict with ``lat``, ``lon`` and ``address`` or None if not cached
        """
        if not self.redis_client:
            return None

        try:
            cached = self.redis_client.get(self._get_cache_key(address, provider))
            if cached:
                logger.debug(f"Cache hit for address: {address[:50]}...")
                return json.loads(cached)
        except (RedisError, ValueError) as e:
            logger.warning(f"Cache retrieval error: {e}")

        return None

    def _cache_result(self, address: str, provider: str, location: Location) -> None:
        """Cache a geocoding result."""
        if not self.redis_client:
            return

        try:
            cache_value = {
                "lat": location.latitude,
                "lon": location.longitude,
                "address": location.address,
            }
            self.redis_client.setex(
                self._get_cache_key(address, provider),
                self.cache_ttl,
                json.dumps(cache_value),
            )
            logger.debug(f"Cached result for address: {address[:50]}...")
        except RedisError as e:
            logger.warning(f"Cache storage error: {e}")

    def _geocode_with(self, provider: str, address: str) -> Optional[dict]:
        """Geocode with one provider, consulting the cache first.

        Provider errors are recorded as warnings so that a fallback provider
        can still succeed.

        Returns:
            Dict with ``lat``, ``lon`` and ``address`` or None if failed
        """
        cached = self._get_cached_result(address, provider)
        if cached:
            return cached

        try:
            location = self.rate_limited[provider](address)
        except (GeocoderTimedOut, GeocoderUnavailable, GeocoderServiceError) as e:
            logger.warning(f"{provider} geocoding failed for '{address[:50]}...': {e}")
            self.warnings.append(f"{provider} geocoding failed: {e}")
            return None

        if not location:
            return None

        self._cache_result(address, provider, location)
        return {
            "lat": location.latitude,
            "lon": location.longitude,
            "address": location.address,
        }

    def parse_address(self, reference: Any) -> None:
        """Geocode a free text address."""
        address = str(reference or "").strip()
        if not address:
            logger.warning("Empty address provided for geocoding")
            self.errors.append("Address location reference is empty")
            return

        providers = [self.primary_provider]
        if self.enable_fallback:
            providers += [p for p in PROVIDERS if p != self.primary_provider]

        for provider in providers:
            result = self._geocode_with(provider, address)
            if result:
                if provider != self.primary_provider:
                    self.warnings.append(
                        f"Primary provider {self.primary_provider} failed, "
                        f"resolved with {provider}"
                    )
                self.coords = [[float(result["lon"]), float(result["lat"])]]
                self.formatted_location_reference = result.get("address") or address
                return

        logger.warning(f"Failed to geocode address: {address[:100]}...")
        self.errors.append(f"Address '{address}' could not be geocoded")
