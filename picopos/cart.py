"""Cart mutations bounded by live catalog stock.

Every function works on a plain list of :class:`CartLine` and never touches
the catalog. Rejected mutations leave the cart unchanged and return ``False``
so callers can tell the user why nothing happened.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from picopos.models import CartLine, MenuItem, OrderLine


def find_menu_item(menu: Iterable[MenuItem], item_id: str) -> MenuItem | None:
    for item in menu:
        if item.item_id == item_id:
            return item
    return None


def find_line(cart: list[CartLine], item_id: str) -> CartLine | None:
    for line in cart:
        if line.item_id == item_id:
            return line
    return None


def add_item(menu: Iterable[MenuItem], cart: list[CartLine], item_id: str) -> bool:
    """Add one unit of an item, or refuse when stock would be exceeded."""
    item = find_menu_item(menu, item_id)
    if item is None or item.stock <= 0:
        return False

    line = find_line(cart, item_id)
    if line is None:
        cart.append(CartLine(item=item, quantity=1))
        return True
    if line.quantity >= item.stock:
        return False
    line.quantity += 1
    return True


def set_quantity(menu: Iterable[MenuItem], cart: list[CartLine], item_id: str, delta: int) -> bool:
    """Shift a line's quantity by ``delta``; lines that reach zero are dropped."""
    line = find_line(cart, item_id)
    if line is None:
        return False

    new_quantity = line.quantity + delta
    if delta > 0:
        # An item deleted from the catalog has nothing left to sell.
        item = find_menu_item(menu, item_id)
        stock = item.stock if item is not None else 0
        if new_quantity > stock:
            return False

    line.quantity = max(0, new_quantity)
    if line.quantity == 0:
        cart.remove(line)
    return True


def set_note(cart: list[CartLine], item_id: str, text: str) -> bool:
    line = find_line(cart, item_id)
    if line is None:
        return False
    line.note = text
    return True


def cart_total(cart: Iterable[CartLine | OrderLine]) -> Decimal:
    return sum((line.amount for line in cart), Decimal("0"))
