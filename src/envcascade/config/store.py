"""Injectable key/value store holding the effective environment.

The loader writes into an EnvStore during startup; request handlers only
read from it. Nothing here touches ``os.environ`` after the initial snapshot.
"""

import os
from typing import Dict, Iterator, Mapping, MutableMapping, Optional


class EnvStore(MutableMapping[str, str]):
    """Mutable mapping of variable name to value.

    Example:
        store = EnvStore.from_environ()          # snapshot of os.environ
        store = EnvStore({"LOG_LEVEL": "debug"})  # explicit, for tests
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvStore":
        """Snapshot ``environ`` (default: the process environment).

        The source mapping is copied and never mutated.
        """
        return cls(os.environ if environ is None else environ)

    def __getitem__(self, name: str) -> str:
        return self._data[name]

    def __setitem__(self, name: str, value: str) -> None:
        self._data[name] = value

    def __delitem__(self, name: str) -> None:
        del self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"EnvStore({len(self._data)} variables)"

    def set(self, name: str, value: str) -> None:
        self._data[name] = value

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the current contents."""
        return dict(self._data)
