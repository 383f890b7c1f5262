"""
Reads Rollcall settings files.

Settings live in config/rollcall.json (or .jsonc, which may carry
// comment lines). File I/O stays here; validation is the settings model's job.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from rollcall.domain.config import RollcallSettings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "rollcall"


def _strip_comments(jsonc_content: str) -> str:
    """Strip full-line // comments from JSONC content."""
    return "\n".join(
        line for line in jsonc_content.splitlines()
        if not line.lstrip().startswith("//")
    )


class ConfigRepository:
    """
    Settings files in one config directory.
    """

    def __init__(self, config_dir: Path):
        """
        Args:
            config_dir: Directory holding rollcall.json
        """
        self.config_dir = Path(config_dir)

    def find_file(self, filename: str) -> Path | None:
        """Return the .json or .jsonc file for filename, if either exists."""
        for ext in (".json", ".jsonc"):
            path = self.config_dir / f"{filename}{ext}"
            if path.exists():
                return path
        return None

    def load_json_file(self, filename: str) -> Dict[str, Any]:
        """
        Parse filename.json, falling back to filename.jsonc.

        Raises:
            FileNotFoundError: If neither file exists
            ValueError: If the content is not a JSON object
        """
        path = self.find_file(filename)
        if path is None:
            raise FileNotFoundError(
                f"Config file '{filename}.json' or '{filename}.jsonc' not found in {self.config_dir}"
            )

        content = path.read_text(encoding="utf-8")
        if path.suffix == ".jsonc":
            content = _strip_comments(content)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse config file %s: %s", path, e)
            raise ValueError(f"Invalid JSON in {path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return data

    def load_settings(self) -> RollcallSettings:
        """
        Load application settings.

        Returns:
            RollcallSettings from config/rollcall.json, or defaults when
            no settings file exists

        Raises:
            ValueError: If the settings file cannot be parsed or validated
        """
        if self.find_file(SETTINGS_FILENAME) is None:
            logger.debug("No settings file in %s, using defaults", self.config_dir)
            return RollcallSettings()

        try:
            data = self.load_json_file(SETTINGS_FILENAME)
            return RollcallSettings(**data)
        except (ValueError, ValidationError) as e:
            logger.error("Failed to load settings: %s", e)
            raise ValueError(f"Invalid settings: {e}") from e
