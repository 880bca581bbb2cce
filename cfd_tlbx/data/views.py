"""Selections over CFD content used by tabulation and export."""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any

from cfd_tlbx.errors import MalformedSelection

from .cfd import ConditionalFreqDist


def _as_key_list(keys: Any, what: str) -> list[Hashable] | None:
    if keys is None:
        return None
    if isinstance(keys, str | bytes):
        raise MalformedSelection(f"{what} must be a sequence of keys, not a single {type(keys).__name__} {keys!r}")
    if not isinstance(keys, Iterable):
        raise MalformedSelection(f"{what} must be iterable, got {type(keys).__name__}")
    out = list(keys)
    seen: set[Hashable] = set()
    for k in out:
        try:
            hash(k)
        except TypeError:
            raise MalformedSelection(f"Unhashable key {k!r} in {what}") from None
        if k in seen:
            raise MalformedSelection(f"Duplicate key {k!r} in {what}")
        seen.add(k)
    return out


def _check_distinct_under_key(conditions: list[Hashable], cfd: ConditionalFreqDist) -> None:
    seen: dict[Hashable, Hashable] = {}
    for condition in conditions:
        try:
            normalized = cfd.key(condition)
        except Exception as exc:
            raise MalformedSelection(f"Condition {condition!r} rejected by the table's key: {exc}") from exc
        if normalized in seen:
            raise MalformedSelection(f"Conditions {seen[normalized]!r} and {condition!r} name the same condition")
        seen[normalized] = condition


@dataclass(frozen=True)
class ResolvedSelection:
    """Concrete rows/columns of a selection against one table.

    Attributes:
        conditions: Row keys in emission order.
        samples: Column keys in emission order.
        cumulative: Whether cells hold running row sums.
    """

    conditions: list[Hashable]
    samples: list[Hashable]
    cumulative: bool = False


@dataclass(frozen=True)
class Selection:
    """Which conditions/samples to tabulate or export, and how.

    Attributes:
        conditions: Ordered condition keys (all conditions when None).
        samples: Ordered sample keys (every sample seen in the selected rows, in
            first-seen order, when None).
        cumulative: Render each cell as the running sum of its row up to it.
        order_by: Optional sort key applied to the condition keys before emission.
            Wrap a comparator with :func:`functools.cmp_to_key`.
    """

    conditions: Iterable[Hashable] | None = None
    samples: Iterable[Hashable] | None = None
    cumulative: bool = False
    order_by: Callable[[Any], Any] | None = None

    def resolve(self, cfd: ConditionalFreqDist) -> ResolvedSelection:
        """Validate the selection against ``cfd`` and fix its rows and columns.

        Raises:
            MalformedSelection: If keys are not a proper key sequence, are
                unhashable or duplicated (conditions: under the table's ``key``),
                do not belong to the table's condition-key type domain, or if
                ``order_by`` is not callable or raises while sorting
        """
        conditions = _as_key_list(self.conditions, "conditions")
        samples = _as_key_list(self.samples, "samples")

        if conditions is None:
            conditions = cfd.conditions()
        else:
            domain = tuple({type(c) for c in cfd.conditions()})
            if domain:
                bad = [c for c in conditions if not isinstance(c, domain)]
                if bad:
                    names = ", ".join(sorted(t.__name__ for t in domain))
                    raise MalformedSelection(f"Condition keys {bad!r} do not match the table's key type ({names})")
            _check_distinct_under_key(conditions, cfd)

        if self.order_by is not None:
            if not callable(self.order_by):
                raise MalformedSelection(f"order_by must be callable, got {type(self.order_by).__name__}")
            try:
                conditions = sorted(conditions, key=self.order_by)
            except Exception as exc:
                raise MalformedSelection(f"Cannot order conditions: {exc}") from exc

        if samples is None:
            samples = cfd.samples(conditions)

        return ResolvedSelection(conditions=conditions, samples=samples, cumulative=bool(self.cumulative))


__all__ = ["ResolvedSelection", "Selection"]
