from typing import Any, Callable, Dict, Iterator, List, Tuple


class IdentityMap:
    """Key-value store that compares keys by identity.

    Unlike a ``dict``, keys do not need to be hashable and a custom
    ``__eq__`` on a key never makes two distinct objects collide. Keys are
    held by strong reference, so an ``id()`` stays unique for as long as
    its entry exists. Entries keep insertion order.

    Example:
        >>> store = IdentityMap()
        >>> store.set(ServiceA, "a")
        >>> store.get(ServiceA)
        'a'
        >>> store.get_keys_for_value("a")
        [<class 'ServiceA'>]
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Any, Any]] = {}

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value stored for ``key``, or ``default`` when there is none."""
        entry = self._entries.get(id(key))
        if entry is None:
            return default
        return entry[1]

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` for ``key``, overwriting any existing value.

        An overwritten key keeps its original position.
        """
        self._entries[id(key)] = (key, value)

    def has(self, key: Any) -> bool:
        """Return whether an entry exists for ``key``, whatever its value."""
        return id(key) in self._entries

    def remove(self, key: Any) -> None:
        """Remove the entry for ``key``. Does nothing if there is none."""
        self._entries.pop(id(key), None)

    def get_values(self) -> List[Any]:
        """Return all stored values in insertion order."""
        return [value for _, value in self._entries.values()]

    def get_keys_for_value(self, value: Any) -> List[Any]:
        """Return every key whose stored value is ``value`` itself."""
        return self.find_keys(lambda stored: stored is value)

    def find_keys(self, predicate: Callable[[Any], bool]) -> List[Any]:
        """Return every key whose stored value satisfies ``predicate``.

        Args:
            predicate: Called with each stored value.

        Returns:
            Matching keys, in insertion order.
        """
        return [key for key, value in self._entries.values() if predicate(value)]

    def keys(self) -> List[Any]:
        return [key for key, _ in self._entries.values()]

    def items(self) -> List[Tuple[Any, Any]]:
        return list(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys())
