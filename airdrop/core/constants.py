"""
Project constants definitions
"""

# ============================================================
# Exit Codes
# ============================================================

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CAPABILITY_UNAVAILABLE = 2
EXIT_INVALID_DEVICE_ARGS = 3

# ============================================================
# Transfer Service
# ============================================================

# Value of NSSharingServiceNameSendViaAirDrop
DEFAULT_SERVICE_NAME = "com.apple.share.AirDrop.send"

URL_SCHEMES = ("http", "https")

# ============================================================
# Picker Anchor
# ============================================================

# (x, y, width, height) handed to the platform picker as the source frame
PICKER_SOURCE_FRAME = (0, 0, 400, 100)
PICKER_WINDOW_SIZE = (1, 1)

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "AIRDROP_"
DEFAULT_CONFIG_PATH = "~/.config/airdrop/config.toml"
DEFAULT_LOG_LEVEL = "WARNING"
