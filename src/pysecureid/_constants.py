"""Internal constants shared across the library."""

# AES-256-GCM
KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

# ------------------------------------------------------------------
# Environment variables read by KeyRingConfig.from_env
# ------------------------------------------------------------------

ENV_PRIMARY_KEY_VERSION = "SECUREID_PRIMARY_KEY_VERSION"
ENV_KEYS = "SECUREID_KEYS"
ENV_KEY_PREFIX = "SECUREID_KEY_"

# Prefixes accepted for key text in configuration.
KEY_PREFIX_BASE64 = "base64:"
KEY_PREFIX_HEX = "hex:"
