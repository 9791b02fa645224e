"""
Lot allocation engine.

Distributes a requested quantity of a product across its price lots,
respecting the agency's purchase history:

    - lots are consumed in ascending ``batch`` order (stable: equal batches
      keep the order they were given in, i.e. insertion order);
    - ``purchase_cap == 0`` grants exactly one unit, and only while the agency
      has never bought any unit of the product (including units placed
      earlier in the same pass);
    - ``purchase_cap > 0`` grants up to ``cap - already_bought_from_lot`` units.

The request is all-or-nothing: when the lots cannot cover the whole
quantity the result has ``can_add = False`` and no usable distribution.

Pure module: no ORM access, no I/O. The cart preview, the catalog/banner
eligibility filter and the checkout all call :func:`allocate`.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Tuple

from apps.core.exceptions import InvalidQuantity


@dataclass(frozen=True)
class Lot:
    id: int
    value: int
    batch: int
    purchase_cap: int

    @classmethod
    def from_price(cls, price) -> "Lot":
        return cls(id=price.pk, value=price.value, batch=price.batch, purchase_cap=price.purchase_cap)


@dataclass(frozen=True)
class LotAllocation:
    price_id: int
    batch: int
    value: int
    quantity: int

    @property
    def subtotal(self) -> int:
        return self.value * self.quantity

    def as_dict(self) -> dict:
        return {
            'price_id': self.price_id,
            'batch': self.batch,
            'value': self.value,
            'quantity': self.quantity,
        }


@dataclass(frozen=True)
class AllocationResult:
    quantity: int
    can_add: bool
    distribution: Tuple[LotAllocation, ...] = ()
    total_price: int = 0
    allocated_units: int = 0

    @property
    def average_unit_price(self) -> Decimal:
        """Preço médio para exibição (total / quantidade, sem arredondar por lote)."""
        if not self.can_add or not self.quantity:
            return Decimal('0')
        return Decimal(self.total_price) / Decimal(self.quantity)

    @property
    def first_lot(self) -> Optional[LotAllocation]:
        return self.distribution[0] if self.distribution else None


def validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity(details={'quantity': quantity})
    return quantity


def _validate_lot(lot: Lot) -> None:
    if lot.value < 0:
        raise ValueError(f"Lote {lot.id} com valor negativo: {lot.value}")
    if lot.purchase_cap < 0:
        raise ValueError(f"Lote {lot.id} com quantidade por agência negativa: {lot.purchase_cap}")


def allocate(
    quantity: int,
    lots: Iterable[Lot],
    agency_purchase_count: int = 0,
    purchases_by_lot: Optional[Mapping[int, int]] = None,
) -> AllocationResult:
    """
    Computes the lot distribution for ``quantity`` units.

    Args:
        quantity: units requested (int > 0)
        lots: candidate lots for the product
        agency_purchase_count: units already confirmed for this agency, any lot
        purchases_by_lot: lot id -> units already confirmed from that lot

    Returns:
        AllocationResult; ``can_add`` is False when the request cannot be
        fully satisfied.

    Raises:
        InvalidQuantity: quantity is not a positive integer
        ValueError: a lot has a negative value or cap
    """
    validate_quantity(quantity)
    purchases_by_lot = purchases_by_lot or {}

    ordered = sorted(lots, key=lambda lot: lot.batch)
    for lot in ordered:
        _validate_lot(lot)

    remaining = quantity
    total_units = agency_purchase_count
    total_price = 0
    distribution = []

    for lot in ordered:
        if remaining <= 0:
            break

        units = 0
        if lot.purchase_cap == 0:
            if total_units == 0:
                units = 1
        else:
            available = lot.purchase_cap - purchases_by_lot.get(lot.id, 0)
            if available > 0:
                units = min(remaining, available)

        if units > 0:
            distribution.append(LotAllocation(price_id=lot.id, batch=lot.batch, value=lot.value, quantity=units))
            total_price += lot.value * units
            remaining -= units
            total_units += units

    if remaining > 0:
        return AllocationResult(quantity=quantity, can_add=False, allocated_units=quantity - remaining)

    return AllocationResult(
        quantity=quantity,
        can_add=True,
        distribution=tuple(distribution),
        total_price=total_price,
        allocated_units=quantity,
    )
