"""Process-wide holder for the published runtime configuration."""

import logging
import threading
from typing import Optional

from .creator import ConfigurationResult
from .models import RuntimeConfiguration

logger = logging.getLogger("apigw.configuration.holder")


class ConfigurationHolder:
    """
    Publishes the current :class:`RuntimeConfiguration`.

    Writers replace the whole snapshot under a lock; readers take the
    reference without locking. A reader therefore always sees one complete
    snapshot, old or new, never a mix. Snapshots are never edited in place.
    """

    def __init__(self, configuration: Optional[RuntimeConfiguration] = None) -> None:
        self._lock = threading.Lock()
        self._configuration = configuration

    def get(self) -> Optional[RuntimeConfiguration]:
        """Return the published snapshot, or None before the first publish."""
        return self._configuration

    def set(self, configuration: RuntimeConfiguration) -> Optional[RuntimeConfiguration]:
        """Publish a new snapshot and return the one it replaced."""
        if not isinstance(configuration, RuntimeConfiguration):
            raise TypeError(
                f"Expected RuntimeConfiguration, got {type(configuration).__name__}"
            )
        with self._lock:
            previous = self._configuration
            self._configuration = configuration
        return previous

    def apply(self, result: ConfigurationResult) -> bool:
        """Publish the configuration of a successful build.

        A failed build leaves the current snapshot in place.

        Returns:
            True if the snapshot was replaced, False if the build failed.
        """
        if result.is_error:
            logger.warning(
                "Configuration build failed with %d error(s); keeping the current configuration",
                len(result.errors),
            )
            return False
        self.set(result.configuration)
        return True

    def clear(self) -> None:
        """Forget the published snapshot. Useful for testing."""
        with self._lock:
            self._configuration = None
