"""Release source, naming and environment constants."""

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_DOWNLOAD_BASE = "https://github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
DOWNLOAD_PATH = "download"

# Repository that publishes adapter-v* releases
GITHUB_REPO = "vulnera-rs/adapter"
TAG_PREFIX = "adapter-v"

BINARY_NAME = "vulnera-adapter"
SERVER_ID = "vulnera"

# Used only when GitHub is unreachable and nothing was ever cached
MINIMUM_ADAPTER_VERSION = "0.1.1"
VERSION_CACHE_TTL_SECS = 24 * 60 * 60

RELEASES_HEADERS = {
    "User-Agent": "vulnera-zed-extension",
    "Accept": "application/vnd.github+json",
}

# Local state files, relative to the install root
INSTALLED_VERSION_FILE = "installed-version.txt"
CACHED_VERSION_FILE = "cached-version.txt"
CACHED_VERSION_TIMESTAMP_FILE = "cached-version-timestamp.txt"

# Shell environment keys
ADAPTER_PATH_ENV = "VULNERA_ADAPTER_PATH"
ADAPTER_VERSION_ENV = "VULNERA_ADAPTER_VERSION"
API_URL_ENV = "VULNERA_API_URL"
API_KEY_ENV = "VULNERA_API_KEY"
LOG_ENV = "VULNERA_LOG"

FORWARDED_ENV_KEYS = (API_URL_ENV, API_KEY_ENV, LOG_ENV)
DEFAULT_LOG_FILTER = "info"
