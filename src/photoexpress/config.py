"""Application wide constants."""

from __future__ import annotations

# Brightness slider bounds.  ``NEUTRAL_BRIGHTNESS`` is both the slider's
# initial value and the identity point of the colour transform.
MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 200
NEUTRAL_BRIGHTNESS = 100

JPEG_QUALITY = 100
JPEG_MIME_TYPE = "image/jpeg"
JPEG_SUFFIX = ".jpg"

PHOTO_FILENAME_PREFIX = "photo_"
PHOTO_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

PICTURES_COLLECTION = "Pictures"
CAPTURES_DIR_NAME = "captures"

# How long the "photo saved" confirmation stays in the status bar.
TOAST_DURATION_MS = 3500

# Environment variable read at start-up to override the console log level.
LOG_LEVEL_ENV = "PHOTOEXPRESS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
