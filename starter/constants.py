# --- Environment Constants ---
ENV_DEVELOPMENT = "development"
ENV_STAGING = "staging"
ENV_PRODUCTION = "production"
ENV_TESTING = "testing"
# --- End Environment Constants ---

# --- Remote Store Constants ---
USERS_TABLE = "users"

# PostgREST / Postgres error codes
PGRST_SINGULAR_RESPONSE = "PGRST116"  # .single() matched zero or several rows
PG_UNIQUE_VIOLATION = "23505"
PG_NOT_NULL_VIOLATION = "23502"
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_CHECK_VIOLATION = "23514"

# --- Access Gate Constants ---
DEFAULT_PUBLIC_ROUTES = [
    "/",
    "/health",
    "/sign-in(.*)",
    "/sign-up(.*)",
    "/api/webhooks(.*)",
]
DEFAULT_SIGN_IN_URL = "/sign-in"

# Paths under these prefixes are always gated, even if they end in a file extension
GATED_PATH_PREFIXES = ("/api", "/trpc")

# Build-internal paths that never reach the gate
EXCLUDED_PATH_PREFIXES = ("/static", "/_next")

STATIC_FILE_EXTENSIONS = (
    "html",
    "htm",
    "css",
    "js",
    "jpg",
    "jpeg",
    "webp",
    "png",
    "gif",
    "svg",
    "ttf",
    "woff",
    "woff2",
    "ico",
    "csv",
    "doc",
    "docx",
    "xls",
    "xlsx",
    "zip",
    "webmanifest",
)

# --- Auth Constants ---
CLOCK_SKEW_MS = 1000 * 30

# --- Webhook Constants ---
# svix rejects deliveries whose timestamp is further than this from now
WEBHOOK_TOLERANCE_SECONDS = 5 * 60
