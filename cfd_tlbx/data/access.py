"""Generic element accessor with chained multi-key lookup.

``get(cfd, condition, sample)`` reads a two-level table uniformly, whatever the
backend behind each level. Dispatch is open: register a new container type with
``get_element.register`` (or subclass :class:`TableLike`) and ``get`` picks it up.

Example:
    >>> from cfd_tlbx.data import ConditionalFreqDist, CountsDistribution, get
    >>> cfd = ConditionalFreqDist({"A": CountsDistribution({"x": 2, "y": 5})})
    >>> get(cfd, "A", "y")
    5
    >>> get(cfd, "A", "z")
    0
"""

from collections.abc import Hashable, Mapping
from functools import reduce, singledispatch
from typing import Any

import pandas as pd

from cfd_tlbx.errors import ConditionNotFound

from .table_like import TableLike


@singledispatch
def get_element(container: Any, key: Hashable) -> Any:
    """Return the value stored under ``key`` in ``container`` (single level).

    Raises:
        TypeError: If no lookup is registered for the container type
    """
    raise TypeError(f"No element access registered for {type(container).__name__}")


@get_element.register
def _(container: TableLike, key: Hashable) -> Any:
    return container.lookup(key)


@get_element.register
def _(container: Mapping, key: Hashable) -> Any:
    try:
        return container[key]
    except KeyError:
        raise ConditionNotFound(key) from None


@get_element.register
def _(container: pd.Series, key: Hashable) -> Any:
    if key not in container.index:
        raise ConditionNotFound(key)
    value = container.loc[key]
    return value.item() if hasattr(value, "item") else value


@get_element.register
def _(container: pd.DataFrame, key: Hashable) -> Any:
    # Rows are conditions, columns are samples (see ConditionalFreqDist.to_frame).
    if key not in container.index:
        raise ConditionNotFound(key)
    return container.loc[key]


def get(container: Any, key: Hashable, *keys: Hashable) -> Any:
    """Look up one or more keys, folding :func:`get_element` left to right.

    ``get(c, k1, k2, k3)`` is ``get_element(get_element(get_element(c, k1), k2), k3)``.
    A missing intermediate key raises immediately; later keys are not tried.

    Args:
        container: Any container with a registered element lookup
        key: First key (e.g. a condition)
        *keys: Further keys applied to the intermediate results (e.g. a sample)

    Returns:
        The value reached after applying every key

    Raises:
        ConditionNotFound: If a condition (or other non-leaf key) is absent
        TypeError: If an intermediate value does not support element access
    """
    return reduce(get_element, (key, *keys), container)


__all__ = ["get", "get_element"]
