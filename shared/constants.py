"""
Constants and configuration values for the cloud resource discovery engine.
"""

# Provider tags attached to every discovered record
GOOGLE_PROVIDER = "google"

# Default configuration values
DEFAULT_WORKERS = 1
MAX_WORKERS = 100
DEFAULT_OUTPUT_FORMAT = "txt"
DEFAULT_OUTPUT_DIRECTORY = "output"

# Supported output formats
SUPPORTED_OUTPUT_FORMATS = ["json", "csv", "txt"]

# Delimiters used to compose child identifiers from the parent durable ID.
# The emitter depends on these exact values.
DURABLE_ID_DELIMITER = ":"
DISPLAY_NAME_DELIMITER = "-"

# Bookkeeping attributes the emitter must never see
DEFAULT_IGNORE_KEYS = frozenset(["id", "self_link", "etag"])

# Consecutive page errors tolerated before a paginated listing is abandoned
MAX_CONSECUTIVE_PAGE_ERRORS = 10

# Error messages
ERROR_MESSAGES = {
    "invalid_output_format": "Invalid output format '{format}'. Supported formats: {supported}",
    "missing_scope": "A discovery scope (project ID) is required",
    "unknown_family": "Unknown resource family '{family}'. Supported families: {supported}",
    "unknown_kind": "No policy registered for resource kind '{kind}'",
    "credentials_not_found": (
        "GCP credentials not found: {error}. Please run 'gcloud auth "
        "application-default login' or set GOOGLE_APPLICATION_CREDENTIALS."
    ),
    "family_aborted": (
        "Discovery did not complete for family {family}; "
        "nothing from {family} is available: {error}"
    ),
}

# Logging configuration
LOGGING_CONFIG = {
    "level": "WARNING",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "suppress_modules": ["google", "google.auth", "googleapiclient", "urllib3"],
}

# File naming patterns
FILE_PATTERNS = {
    "discovered_resources": "{provider}_discovered_resources_{timestamp}.{format}",
}
