from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """
    Interface for the local key/value storage in the infrastructure layer.
    Values are strings (JSON documents), one slot per key.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key; a missing key is not an error."""
        pass
