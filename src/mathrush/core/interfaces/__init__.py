"""Storage abstraction interfaces."""

from mathrush.core.interfaces.storage import KeyValueStorage

__all__ = ["KeyValueStorage"]
