"""Collection allow-list shared by the indexing and enrichment hooks."""

from collections.abc import Iterable


class AllowList:
    """Immutable set of collections eligible for syncing.

    An empty allow-list admits every collection.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(names)

    @property
    def names(self) -> frozenset[str]:
        return self._names

    def __contains__(self, collection: object) -> bool:
        if not self._names:
            return True
        return collection in self._names

    def describe(self) -> str:
        """Human-readable form for startup logs."""
        if not self._names:
            return "all"
        return ", ".join(sorted(self._names))
