"""Cart-line references and matching.

A checkout entry points at a cart line either directly by the line's id
or by what the line holds (item kind + catalog reference). An entry may
carry both; the direct id is tried first and the reference is the
fallback.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

from pharmoms.domain.model.cart import CartLine
from pharmoms.domain.model.value_objects import ItemKind


@dataclass(frozen=True)
class ByLineId:
    line_id: str

    def matches(self, line: CartLine) -> bool:
        return line.id == self.line_id


@dataclass(frozen=True)
class ByReference:
    kind: ItemKind
    reference_id: str

    def matches(self, line: CartLine) -> bool:
        return line.refers_to(self.kind, self.reference_id)


LineRef = Union[ByLineId, ByReference]


def line_refs(
    cart_item_id: str | None,
    item_kind: ItemKind | str | None,
    reference_id: str | None,
) -> list[LineRef]:
    """Build the ordered candidate references for one checkout entry.

    Returns an empty list when the entry identifies nothing.
    """
    refs: list[LineRef] = []
    if cart_item_id:
        refs.append(ByLineId(str(cart_item_id)))
    if reference_id:
        kind = ItemKind.parse(item_kind) if item_kind else ItemKind.PRODUCT
        refs.append(ByReference(kind, str(reference_id)))
    return refs


def match_line(lines: Iterable[CartLine], refs: Sequence[LineRef]) -> CartLine | None:
    lines = list(lines)
    for ref in refs:
        for line in lines:
            if ref.matches(line):
                return line
    return None
