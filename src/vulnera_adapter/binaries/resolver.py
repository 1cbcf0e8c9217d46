"""Target adapter version resolution."""
from typing import Optional

from vulnera_adapter.binaries.constants import (
    GITHUB_REPO,
    MINIMUM_ADAPTER_VERSION,
    VERSION_CACHE_TTL_SECS,
)
from vulnera_adapter.binaries.releases import fetch_latest_stable_version
from vulnera_adapter.binaries.state import LocalState, now_secs
from vulnera_adapter.logging import get_logger
from vulnera_adapter.utils.fetching import Transport

logger = get_logger(__name__)


async def resolve_version(
    state: LocalState,
    transport: Transport,
    explicit_override: Optional[str] = None,
    now: Optional[int] = None,
    ttl: int = VERSION_CACHE_TTL_SECS,
    minimum_version: str = MINIMUM_ADAPTER_VERSION,
    repo: str = GITHUB_REPO,
) -> str:
    """Resolve the adapter version to run.

    Priority order, first hit wins:

    1. explicit override (``VULNERA_ADAPTER_VERSION``)
    2. cached latest version younger than ``ttl``
    3. live query to the GitHub releases listing, written back to the cache
    4. cached latest version of any age
    5. ``minimum_version``

    Never raises for network or cache problems.
    """
    if explicit_override is not None and explicit_override.strip():
        version = explicit_override.strip()
        logger.info("adapter_version_from_override", version=version)
        return version

    if now is None:
        now = now_secs()

    cached = state.read_latest_cache()
    if cached is not None and cached.age(now) < ttl:
        logger.info("adapter_version_from_cache", version=cached.version, age=cached.age(now))
        return cached.version

    logger.info("fetching_latest_adapter_version", repo=repo)
    fetched = await fetch_latest_stable_version(transport, repo=repo)
    if fetched is not None:
        logger.info("adapter_version_from_github", version=fetched)
        state.write_latest_cache(fetched, fetched_at=now)
        return fetched

    if cached is not None:
        logger.warning("adapter_version_from_stale_cache", version=cached.version, age=cached.age(now))
        return cached.version

    logger.warning("adapter_version_from_minimum", version=minimum_version)
    return minimum_version
