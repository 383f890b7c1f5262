"""
Dependency injection container for the application.

Creates the settings, store and state manager once and hands the same
instances to every command.
"""

import logging
from pathlib import Path
from typing import Optional

from rollcall.application.check_in_session import CheckInSession
from rollcall.application.roster_manager import RosterStateManager
from rollcall.domain.config import RollcallSettings
from rollcall.infrastructure.config import ConfigRepository
from rollcall.infrastructure.sqlite import RosterStore

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation and lifecycle of application services and
    infrastructure components.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        settings: Optional[RollcallSettings] = None,
    ):
        """
        Initialize the container.

        Args:
            config_dir: Base directory for configuration files
            settings: Explicit settings (skips loading config/rollcall.json)
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"
        self._settings = settings

        self._config_repository: Optional[ConfigRepository] = None
        self._store: Optional[RosterStore] = None
        self._manager: Optional[RosterStateManager] = None

    @property
    def config_repository(self) -> ConfigRepository:
        if self._config_repository is None:
            self._config_repository = ConfigRepository(self.config_dir)
        return self._config_repository

    @property
    def settings(self) -> RollcallSettings:
        """
        Application settings.

        Raises:
            ValueError: If the settings file exists but is invalid
        """
        if self._settings is None:
            self._settings = self.config_repository.load_settings()
        return self._settings

    def override(self, **values) -> None:
        """Apply CLI overrides (None values are ignored)."""
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return
        if self._store is not None or self._manager is not None:
            raise RuntimeError("Settings cannot change after services are created")
        self._settings = self.settings.model_copy(update=updates)
        logger.debug("Settings overridden: %s", ", ".join(sorted(updates)))

    @property
    def store(self) -> RosterStore:
        if self._store is None:
            self._store = RosterStore(self.settings.db_path, roster_key=self.settings.roster_key)
        return self._store

    @property
    def manager(self) -> RosterStateManager:
        """State manager, loaded from the store on first access."""
        if self._manager is None:
            self._manager = RosterStateManager(
                self.store, sheet_title=self.settings.sheet_title
            )
            self._manager.load_persisted()
        return self._manager

    def check_in_session(self) -> CheckInSession:
        return CheckInSession(self.manager)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
