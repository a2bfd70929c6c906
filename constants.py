# constants.py - Define constants used throughout the application

# --- File/Directory Names ---
DEFAULT_MIRROR_ROOT = "." # Mirror tree is rooted at the working directory by default
DEFAULT_LOG_FILE = "mirror_service.log"
DEFAULT_CONFIG_FILE = "config.json"
ASSETS_DIR_NAME = "assets" # Subdirectory for attached assets relative to page dir

# --- Asset Scope ---
# Brand substrings identifying the mirrored site family's asset hosts
DEFAULT_ASSET_HOST_SUBSTRINGS = ["benvenuti", "bravissimi", "ekla"]
# Top-level landing page, never treated as an asset
DEFAULT_EXCLUDED_URLS = ["https://benvenuti.e-monsite.com/"]
PAGE_URL_PATTERNS = [
    r"^https?://[^/]+/pages/.+",
    r"^https?://[^/]+/blog/.+",
]
PAGE_SUFFIX = ".html"
PDF_SUFFIX = ".pdf"

# Tag/attribute groups scanned for asset references, in output order
HREF_TAGS = ["a", "link"]
SRC_TAGS = ["img", "iframe", "audio", "source"]

# --- URL Mapping ---
MIRROR_URL_PATTERN = r"^https?://(.+)/([^/]+)$"

# --- Server Defaults ---
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DEFAULT_LOCK_TIMEOUT = 5 # Seconds to wait for shared state before failing

# --- Sessions ---
SESSION_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
