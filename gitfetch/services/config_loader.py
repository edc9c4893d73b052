import json
import logging
from collections.abc import Mapping
from pathlib import Path

from gitfetch.schemas.config import GitfetchConfig

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    return Path.home() / ".config" / "gitfetch" / "config.json"


def load_config(path: Path | None = None) -> GitfetchConfig | None:
    """Load the user configuration file.

    Returns None when the file is missing, unreadable, or not a JSON object.
    Each of those cases is logged as a warning; none of them stops the run.
    """

    if path is None:
        path = default_config_path()

    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("No config file at %s, using defaults", path)
        return None
    except OSError as exc:
        logger.warning("Cannot read config file %s (%s), using defaults", path, exc)
        return None
    except UnicodeDecodeError as exc:
        logger.warning("Config file %s is not UTF-8 (%s), using defaults", path, exc)
        return None

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.warning("Config file %s is not valid JSON (%s), using defaults", path, exc)
        return None

    if not isinstance(payload, Mapping):
        logger.warning("Config file %s must contain a JSON object, using defaults", path)
        return None

    return GitfetchConfig.model_validate(payload)
