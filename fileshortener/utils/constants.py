import string


# Shortcodes: URL-safe characters only (RFC 3986 unreserved, minus '.' and '~')
URL_SAFE_CHARACTERS = frozenset(string.ascii_letters + string.digits + '-_')
MAX_SHORTCODE_LENGTH = 64

# Shortcodes which would shadow the service's own routes
RESERVED_SHORTCODES = frozenset({'links', 'submit'})

# Target URLs
ALLOWED_URL_SCHEMES = frozenset({'http', 'https'})
MAX_URL_LENGTH = 2048

# Shortcode generation defaults
DEFAULT_SHORTCODE_LENGTH = 7
DEFAULT_MAX_GENERATION_ATTEMPTS = 10
MIN_SHORTCODE_ENTROPY_BITS = 24

# Durable storage defaults
DEFAULT_LINKS_FILE = 'links.json'
JSON_INDENT = 2

# Fallback base URL for short links when the request carries no host
LOCAL_BASE_URL = 'http://localhost:3001'

# Environment variable names
APP_ENV_ENV = 'APP_ENV'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
LOG_LEVEL_ENV = 'LOG_LEVEL'
LINKS_FILE_ENV = 'FILESHORTENER_LINKS_FILE'
DEBUG_ENV = 'FILESHORTENER_DEBUG'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
