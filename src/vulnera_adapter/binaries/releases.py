"""Latest stable adapter release from the GitHub releases listing."""
from typing import Optional

from vulnera_adapter.binaries.constants import (
    GITHUB_API_BASE,
    GITHUB_REPO,
    GITHUB_REPOS_PATH,
    RELEASES_HEADERS,
    RELEASES_PATH,
    TAG_PREFIX,
)
from vulnera_adapter.errors import RemoteUnavailableError, log_error
from vulnera_adapter.logging import get_logger
from vulnera_adapter.utils.fetching import Transport

logger = get_logger(__name__)

TAG_KEY = '"tag_name":'
OBJECT_SEPARATOR = "},{"
PRERELEASE_MARKER = '"prerelease":true'
DRAFT_MARKER = '"draft":true'


def releases_url(repo: str = GITHUB_REPO) -> str:
    return f"{GITHUB_API_BASE}/{GITHUB_REPOS_PATH}/{repo}/{RELEASES_PATH}"


def parse_latest_stable_version(body: str, tag_prefix: str = TAG_PREFIX) -> Optional[str]:
    """Return the version of the first stable ``adapter-v*`` release in body.

    This is a linear scan over the raw text rather than a JSON parse. The
    listing is ordered newest-first, so the first tag that carries the
    prefix and whose object is neither a prerelease nor a draft wins. An
    object is taken to run from its ``"tag_name":`` key to the next ``},{``
    (or the end of the text for the last release). Nested objects inside a
    release before that separator are not handled.
    """
    remaining = body

    while (tag_start := remaining.find(TAG_KEY)) != -1:
        after_key = remaining[tag_start + len(TAG_KEY):]

        value_start = after_key.find('"')
        if value_start == -1:
            return None
        value_slice = after_key[value_start + 1:]
        value_end = value_slice.find('"')
        if value_end == -1:
            return None
        tag_name = value_slice[:value_end]

        if tag_name.startswith(tag_prefix):
            object_end = remaining.find(OBJECT_SEPARATOR, tag_start)
            object_slice = remaining[tag_start:object_end] if object_end != -1 else remaining[tag_start:]

            is_prerelease = PRERELEASE_MARKER in object_slice
            is_draft = DRAFT_MARKER in object_slice

            if not is_prerelease and not is_draft:
                # every leading repetition of the prefix is stripped
                version = tag_name
                while version.startswith(tag_prefix):
                    version = version[len(tag_prefix):]
                if version:
                    return version

        remaining = after_key

    return None


async def fetch_latest_stable_version(
    transport: Transport,
    repo: str = GITHUB_REPO,
) -> Optional[str]:
    """Query GitHub once for the newest stable adapter version.

    Returns None when the listing is unavailable or unusable; callers fall
    back to cached or built-in versions.
    """
    url = releases_url(repo)

    try:
        response = await transport.get(url, headers=RELEASES_HEADERS)
    except Exception as e:
        log_error(RemoteUnavailableError(f"GitHub API request failed: {e}", {"url": url}), logger=logger)
        return None

    if not response.ok:
        log_error(
            RemoteUnavailableError("GitHub API returned an error status", {"url": url, "status": response.status}),
            logger=logger,
        )
        return None

    try:
        body = response.body.decode("utf-8")
    except UnicodeDecodeError as e:
        log_error(RemoteUnavailableError(f"Failed to decode GitHub API response: {e}", {"url": url}), logger=logger)
        return None

    # HTML error pages and rate-limit objects are not arrays
    if not body.lstrip().startswith("["):
        log_error(
            RemoteUnavailableError("GitHub API returned unexpected body (not a JSON array)", {"url": url}),
            logger=logger,
        )
        return None

    version = parse_latest_stable_version(body)
    if version is None:
        logger.info("no_stable_release_found", url=url)
    return version
