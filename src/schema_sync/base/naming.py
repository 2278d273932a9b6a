"""Case-insensitive comparison of catalog object names."""

from typing import Iterable, Optional


def names_equal(left: Optional[str], right: Optional[str]) -> bool:
    """Compare two object names the way the catalog folds them."""
    if left is None or right is None:
        return left is right
    return left.casefold() == right.casefold()


def contains_name(names: Iterable[str], name: str) -> bool:
    """Check if ``name`` is present in ``names`` ignoring case."""
    return any(names_equal(candidate, name) for candidate in names)
