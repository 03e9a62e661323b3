"""Protocol for the persisted-configuration collaborator."""

from collections.abc import Mapping  # noqa: TC003 - Used in runtime type annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of the persisted clawdbot configuration.

    Implementations return the whole parsed document. Reading is repeated on
    every call so edits made between enable requests are picked up.
    """

    def load_config(self) -> Mapping[str, object]:
        """Load the configuration document.

        Returns:
            The parsed configuration, or an empty mapping when none exists.
        """
        ...
