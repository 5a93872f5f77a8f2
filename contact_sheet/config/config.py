# Frame selection settings
DEFAULT_INTERVAL_FRAMES = 1
DEFAULT_INTERVAL_SECONDS = 30.0
TIME_TO_FRAME_EPSILON = 1e-9
MAX_SAMPLES_WARNING = 500

# Grid settings
DEFAULT_COLUMNS = 4
DEFAULT_THUMBNAIL_WIDTH = 300
DEFAULT_BORDER_SPACING = 10
DEFAULT_FILM_SPACING = 10
DEFAULT_ASPECT_LOCK = True

# Border settings
DEFAULT_SHOW_BORDER = True
DEFAULT_BORDER_THICKNESS = 2
DEFAULT_BORDER_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#ffffff"

# Timestamp label settings
DEFAULT_SHOW_TIMESTAMP = True
DEFAULT_TIMESTAMP_FONT_SIZE = 14
DEFAULT_TIMESTAMP_COLOR = "#000000"
DEFAULT_TIMESTAMP_POSITION = "bottom-center"
TIMESTAMP_POSITIONS = ("top-left", "top-right", "bottom-left", "bottom-right", "bottom-center")
LABEL_INSET = 2
LABEL_PADDING = 2

# Label panel colors
LABEL_BG_COLOR = "#ffffff"
LABEL_BG_ALPHA = 0.6

# Output settings
OUTPUT_FORMATS = ("jpeg", "png")
DEFAULT_OUTPUT_FORMAT = "jpeg"
DEFAULT_JPEG_QUALITY = 90
JPEG_MAX_DIMENSION = 65535

# Video formats
SUPPORTED_VIDEO_FORMATS = ['.mp4', '.avi', '.mov', '.mkv', '.wmv', '.flv', '.webm']

# Default settings
DEFAULT_CONFIG_PATH = "config/default_config.json"
DEFAULT_LOG_LEVEL = "INFO"
ENV_PREFIX = "CONTACT_SHEET_"
