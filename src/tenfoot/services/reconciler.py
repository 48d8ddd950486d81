"""
Reconciliation of displayed cells against a freshly fetched item list.

reconcile() is a pure diff: it never touches cells, it only says which ids
to remove, which items to add and which surviving ids to reposition so
that the displayed order ends up equal to the new order.
"""

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Set, Tuple

KeyFunc = Callable[[Any], str]


def _default_key(item: Any) -> str:
    return item.id


@dataclass
class ReconcilePlan:
    """Operations that turn the old id order into the new one."""

    removals: List[str] = field(default_factory=list)
    additions: List[Tuple[Any, int]] = field(default_factory=list)
    moves: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.removals or self.additions or self.moves)


def dedupe_by_id(
    items: Sequence[Any], key: KeyFunc = _default_key
) -> Tuple[List[Any], List[str]]:
    """
    Drop items whose id was already seen.

    Args:
        items: Items in source order
        key: Returns the id of an item

    Returns:
        Tuple of (unique items keeping the first occurrence, duplicate ids)
    """
    seen: Set[str] = set()
    unique = []
    duplicates = []
    for item in items:
        item_id = key(item)
        if item_id in seen:
            if item_id not in duplicates:
                duplicates.append(item_id)
            continue
        seen.add(item_id)
        unique.append(item)
    return unique, duplicates


def _stable_positions(positions: List[int]) -> Set[int]:
    """
    Indices into positions that form a longest increasing subsequence.

    Those survivors already sit in the right relative order and can stay
    where they are.
    """
    tails: List[int] = []
    tail_index: List[int] = []
    previous = [-1] * len(positions)

    for i, value in enumerate(positions):
        slot = bisect_left(tails, value)
        if slot == len(tails):
            tails.append(value)
            tail_index.append(i)
        else:
            tails[slot] = value
            tail_index[slot] = i
        previous[i] = tail_index[slot - 1] if slot > 0 else -1

    keep: Set[int] = set()
    i = tail_index[-1] if tail_index else -1
    while i >= 0:
        keep.add(i)
        i = previous[i]
    return keep


def reconcile(
    old_ids: Sequence[str], new_items: Sequence[Any], key: KeyFunc = _default_key
) -> ReconcilePlan:
    """
    Diff the displayed id order against a new item list.

    Args:
        old_ids: Ids currently displayed, in order
        new_items: Items to display, in order, without duplicate ids
        key: Returns the id of an item

    Returns:
        ReconcilePlan with removals in old order, additions tagged with
        their index in the new order, and moves for surviving ids that are
        out of relative order

    Raises:
        ValueError: If new_items repeats an id
    """
    new_index: Dict[str, int] = {}
    for i, item in enumerate(new_items):
        item_id = key(item)
        if item_id in new_index:
            raise ValueError(f"Duplicate item id: {item_id}")
        new_index[item_id] = i
    old_set = set(old_ids)

    removals = [item_id for item_id in old_ids if item_id not in new_index]

    additions = [
        (item, i) for i, item in enumerate(new_items) if key(item) not in old_set
    ]

    survivors = [item_id for item_id in old_ids if item_id in new_index]
    positions = [new_index[item_id] for item_id in survivors]
    keep = _stable_positions(positions)
    moves = sorted(
        (
            (item_id, positions[i])
            for i, item_id in enumerate(survivors)
            if i not in keep
        ),
        key=lambda move: move[1],
    )

    return ReconcilePlan(removals=removals, additions=additions, moves=moves)


def apply_to_order(
    old_ids: Sequence[str], plan: ReconcilePlan, key: KeyFunc = _default_key
) -> List[str]:
    """
    Apply a plan to a plain id list.

    Removals go first, moved ids are detached, then additions and moves
    are inserted together in ascending target index.
    """
    moved = {item_id for item_id, _ in plan.moves}
    removed = set(plan.removals)
    order = [i for i in old_ids if i not in removed and i not in moved]

    inserts = [(index, key(item)) for item, index in plan.additions]
    inserts += [(index, item_id) for item_id, index in plan.moves]
    for index, item_id in sorted(inserts):
        order.insert(index, item_id)
    return order
