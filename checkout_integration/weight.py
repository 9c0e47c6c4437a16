"""
weight.py — Parcel weight estimation

Shared by the rate check and the shipment creation payloads so both always
quote the same weight for the same order.
"""

from typing import Iterable

from .models import LineItem

# Weight in kg per unit
PAIR_WEIGHT = 5
SET_WEIGHT = 10
SPORT_SPRING_WEIGHT = 8
DEFAULT_WEIGHT = 5


def _tag(item, name: str) -> str:
    value = getattr(item, name, None)
    return value if isinstance(value, str) else ""


def _unit_weight(item) -> int:
    position = _tag(item, "position")
    if "FRONT" in position or "REAR" in position:
        return PAIR_WEIGHT
    if "1SET" in position:
        return SET_WEIGHT
    if "Sport Spring" in _tag(item, "type"):
        return SPORT_SPRING_WEIGHT
    return DEFAULT_WEIGHT


def estimate_weight(items: Iterable[LineItem]) -> int:
    """
    Estimates the total shipment weight of an order's line items.

    Position tags are checked before the type tag and the first matching
    rule decides the unit weight of an item. Missing or non-string tags fall
    through to the default weight.

    Args:
        items (Iterable[LineItem]): The order's line items.

    Returns:
        int: Total weight in kg, never negative.
    """
    total = 0
    for item in items:
        quantity = getattr(item, "quantity", 0)
        if not isinstance(quantity, int) or quantity < 0:
            quantity = 0
        total += _unit_weight(item) * quantity
    return total
