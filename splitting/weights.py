"""
Weight functions and key helpers for the weighted splitter.

A weight function scores a candidate intersection from the number of
elements it holds and the number of sets holding it. The splitter extracts
the intersection with the highest weight first.

Note: the set count of an intersection only covers the pairs whose whole
intersection is exactly that group, so an intersection contained in bigger
ones is undercounted. Counting them exactly would mean recomputing
intersections of every subset of sets.
"""

from collections.abc import Hashable, Iterable

from constants import KEY_SEPARATOR

from .types import WeightFunction


def elements_count(element_count: int, set_count: int) -> float:
    """Favours the biggest intersections."""
    return element_count


def sets_count(element_count: int, set_count: int) -> float:
    """Favours the most widely shared intersections."""
    return set_count


def product_sets_elements_count(element_count: int, set_count: int) -> float:
    """Favours intersections saving the most element copies."""
    return element_count * set_count


def elements_count_reverse(element_count: int, set_count: int) -> float:
    return -element_count


def sets_count_reverse(element_count: int, set_count: int) -> float:
    return -set_count


def product_sets_elements_count_reverse(element_count: int, set_count: int) -> float:
    return -element_count * set_count


WEIGHT_FUNCTIONS: dict[str, WeightFunction] = {
    "elements_count": elements_count,
    "sets_count": sets_count,
    "product_sets_elements_count": product_sets_elements_count,
    "elements_count_reverse": elements_count_reverse,
    "sets_count_reverse": sets_count_reverse,
    "product_sets_elements_count_reverse": product_sets_elements_count_reverse,
}


def join_sorted_strings(elements: Iterable[str]) -> str:
    """Key of a group of strings: sorted, joined with KEY_SEPARATOR."""
    return KEY_SEPARATOR.join(sorted(elements))


def split_joined_strings(key: str) -> list[str]:
    """Inverse of join_sorted_strings."""
    return key.split(KEY_SEPARATOR)


def frozen_key[T: Hashable](elements: Iterable[T]) -> frozenset[T]:
    """Default key of a group of elements: the frozenset of them."""
    return frozenset(elements)


def frozen_elements[T: Hashable](key: frozenset[T]) -> frozenset[T]:
    """Inverse of frozen_key."""
    return key
