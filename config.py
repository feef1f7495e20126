import os

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment
from enums.storage_backend import StorageBackend

# Load .env but don't override existing environment variables
# This allows test runs to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    import sys
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

# Parse STORAGE_BACKEND (where cart and favorites are persisted between sessions)
try:
    STORAGE_BACKEND = StorageBackend(os.environ.get("STORAGE_BACKEND", "memory").lower())
except ValueError as e:
    valid_backends = [b.value for b in StorageBackend]
    import sys
    print(f"\n ERROR: Invalid STORAGE_BACKEND configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_backends)}", file=sys.stderr)
    print(f"\nAdd to .env: STORAGE_BACKEND={valid_backends[0]}\n", file=sys.stderr)
    sys.exit(1)

# Session state storage
STORAGE_NAMESPACE = os.environ.get("STORAGE_NAMESPACE", "storefront")
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
FAVORITES_STORAGE_KEY = os.environ.get("FAVORITES_STORAGE_KEY", "favorites")
# 0 = records never expire
STORAGE_TTL_SECONDS = int(os.environ.get("STORAGE_TTL_SECONDS", "0"))

REDIS_HOST = os.environ.get("REDIS_HOST")
REDIS_PORT = int(os.environ.get("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD")
REDIS_DB = int(os.environ.get("REDIS_DB", "0"))

# Catalog seed data for the mock remote API
CATALOG_DATA_PATH = os.environ.get(
    "CATALOG_DATA_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "catalog.json")
)

# Multiplier applied to the simulated network latency of the mock API.
# 1.0 = 200-1000ms per call, 0 = no waiting (default in TEST)
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.TEST:
    MOCK_API_LATENCY_FACTOR = float(os.environ.get("MOCK_API_LATENCY_FACTOR", "0"))
else:
    MOCK_API_LATENCY_FACTOR = float(os.environ.get("MOCK_API_LATENCY_FACTOR", "1.0"))

# Cart Configuration
CART_ENFORCE_STOCK_LIMIT = os.environ.get("CART_ENFORCE_STOCK_LIMIT", "true") == "true"  # Clamp line quantities to product stock
SHIPPING_FEE = float(os.environ.get("SHIPPING_FEE", "15.99"))  # Flat fee, charged when the cart is not empty

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask customer data in logs

# Log Retention: Environment-specific defaults
# Dev: keep 30 days for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))
