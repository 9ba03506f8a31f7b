"""HTTP constants for the native client.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

# HTTP Status Code Ranges
HTTP_STATUS_REDIRECT_MIN = 300
HTTP_STATUS_REDIRECT_MAX = 400
HTTP_STATUS_MOVED_PERMANENTLY = 301
HTTP_STATUS_FOUND = 302
HTTP_STATUS_SEE_OTHER = 303

# Statuses that downgrade the method to GET, like curl and browsers do
METHOD_REWRITE_STATUSES = frozenset(
    {HTTP_STATUS_MOVED_PERMANENTLY, HTTP_STATUS_FOUND, HTTP_STATUS_SEE_OTHER}
)

# Default ports per scheme
DEFAULT_HTTP_PORT = 80
DEFAULT_HTTPS_PORT = 443

# Chunk size requested from body callables
CHUNK_SIZE = 16372

# Client defaults
DEFAULT_MAX_HOST_CONNECTIONS = 6
DEFAULT_MAX_REDIRECTS = 20
DEFAULT_HTTP_VERSION = "1.1"
DEFAULT_USER_AGENT = "nativehttp/1.0"
DEFAULT_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Supported fingerprint algorithms
FINGERPRINT_SHA256 = "sha256"
FINGERPRINT_PIN_SHA256 = "pin-sha256"
