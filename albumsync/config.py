from pathlib import Path
import json

from loguru import logger

from albumsync.errors import ConfigurationError

# === PATH CONFIGURATION ===
DATA_DIR = Path("data")
CONFIG_FILE = Path("sync_config.json")
DEFAULT_TOKEN_FILE = DATA_DIR / "flickr_token.json"
METADATA_FILENAME = "names.xls"

# === SYNC LIMITS ===
MAX_UPLOAD_ATTEMPTS = 10
IMAGE_EXTENSIONS = {".jpg", ".jpeg"}
ALBUM_PAGE_SIZE = 500  # largest page photosets.getPhotos will return
REQUEST_TIMEOUT = 60  # seconds
UPLOAD_TIMEOUT = 300  # seconds, covers sending the whole file

# === FLICKR ===
REST_URL = "https://api.flickr.com/services/rest/"
UPLOAD_URL = "https://up.flickr.com/services/upload/"
REQUEST_TOKEN_URL = "https://www.flickr.com/services/oauth/request_token"
AUTHORIZE_URL = "https://www.flickr.com/services/oauth/authorize"
ACCESS_TOKEN_URL = "https://www.flickr.com/services/oauth/access_token"
PERMS = "write"

DEFAULTS = {
    "directory": str(DATA_DIR),
    "token_file": str(DEFAULT_TOKEN_FILE),
    "metadata_file": None,  # None => <directory>/names.xls
    "log_dir": "logs",
    "debug": False,
}


def load_user_config(path: Path = CONFIG_FILE) -> dict:
    """
    Load the user's sync_config.json (photo directory, token file, logging).
    Missing keys, or a missing file, fall back to DEFAULTS.
    """
    config = dict(DEFAULTS)
    path = Path(path)
    if not path.exists():
        logger.info("Config file '{}' not found. Using defaults.", path)
        return config

    with open(path, "r", encoding="utf-8") as f:
        try:
            config.update(json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file '{path}' is not valid JSON: {e}") from e
    return config


def metadata_path(config: dict) -> Path:
    """Where the names workbook lives for this config."""
    if config.get("metadata_file"):
        return Path(config["metadata_file"])
    return Path(config["directory"]) / METADATA_FILENAME
