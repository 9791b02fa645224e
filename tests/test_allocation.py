import itertools
from decimal import Decimal

import pytest

from apps.catalog.allocation import Lot, allocate
from apps.core.exceptions import InvalidQuantity


def lot(id, value, batch, cap):
    return Lot(id=id, value=value, batch=batch, purchase_cap=cap)


class TestAllocationScenarios:
    def test_single_unit_lot_for_new_agency(self):
        result = allocate(1, [lot(1, 100, 1, 0)])

        assert result.can_add is True
        assert [l.as_dict() for l in result.distribution] == [
            {'price_id': 1, 'batch': 1, 'value': 100, 'quantity': 1}
        ]
        assert result.total_price == 100

    def test_single_unit_lot_already_bought(self):
        result = allocate(1, [lot(1, 100, 1, 0)], agency_purchase_count=1, purchases_by_lot={1: 1})

        assert result.can_add is False
        assert result.distribution == ()
        assert result.total_price == 0

    def test_capped_lots_in_batch_order(self):
        lots = [lot(2, 120, 2, 5), lot(1, 100, 1, 2)]

        result = allocate(4, lots)

        assert result.can_add is True
        assert [(l.price_id, l.quantity) for l in result.distribution] == [(1, 2), (2, 2)]
        assert result.total_price == 2 * 100 + 2 * 120
        assert result.average_unit_price == Decimal(440) / Decimal(4)

    def test_partial_history_on_capped_lot(self):
        lots = [lot(1, 100, 1, 2), lot(2, 120, 2, 5)]

        result = allocate(3, lots, agency_purchase_count=1, purchases_by_lot={1: 1})

        assert [(l.price_id, l.quantity) for l in result.distribution] == [(1, 1), (2, 2)]
        assert result.total_price == 340

    def test_insufficient_capacity_is_all_or_nothing(self):
        lots = [lot(1, 100, 1, 2), lot(2, 120, 2, 1)]

        result = allocate(5, lots)

        assert result.can_add is False
        assert result.distribution == ()
        assert result.total_price == 0
        assert result.allocated_units == 3

    def test_single_unit_lot_only_counts_once_in_the_same_pass(self):
        lots = [lot(1, 50, 1, 0), lot(2, 80, 2, 0), lot(3, 100, 3, 3)]

        result = allocate(3, lots)

        assert [(l.price_id, l.quantity) for l in result.distribution] == [(1, 1), (3, 2)]
        assert result.total_price == 50 + 200

    def test_single_unit_lot_skipped_when_agency_bought_other_lot(self):
        lots = [lot(1, 50, 1, 0), lot(2, 100, 2, 3)]

        result = allocate(1, lots, agency_purchase_count=1, purchases_by_lot={2: 1})

        assert [(l.price_id, l.quantity) for l in result.distribution] == [(2, 1)]

    def test_equal_batches_keep_input_order(self):
        lots = [lot(7, 90, 1, 1), lot(3, 100, 1, 1)]

        result = allocate(1, lots)

        assert result.distribution[0].price_id == 7

    def test_zero_value_lot(self):
        result = allocate(1, [lot(1, 0, 1, 0)])

        assert result.can_add is True
        assert result.total_price == 0

    def test_no_lots(self):
        result = allocate(1, [])

        assert result.can_add is False
        assert result.allocated_units == 0


class TestAllocationValidation:
    @pytest.mark.parametrize('quantity', [0, -1, 1.5, '2', None, True])
    def test_invalid_quantity(self, quantity):
        with pytest.raises(InvalidQuantity):
            allocate(quantity, [lot(1, 100, 1, 0)])

    def test_invalid_quantity_is_value_error(self):
        with pytest.raises(ValueError):
            allocate(0, [lot(1, 100, 1, 0)])

    def test_negative_lot_value(self):
        with pytest.raises(ValueError):
            allocate(1, [lot(1, -5, 1, 0)])

    def test_negative_cap(self):
        with pytest.raises(ValueError):
            allocate(1, [lot(1, 10, 1, -1)])


LOT_SETS = [
    [lot(1, 100, 1, 0)],
    [lot(1, 100, 1, 2), lot(2, 120, 2, 5)],
    [lot(1, 50, 1, 0), lot(2, 80, 2, 0), lot(3, 100, 3, 3)],
    [lot(1, 10, 2, 1), lot(2, 20, 1, 2), lot(3, 30, 3, 0)],
]

HISTORIES = [
    (0, {}),
    (1, {1: 1}),
    (2, {2: 2}),
    (3, {1: 1, 3: 2}),
]


class TestAllocationProperties:
    @pytest.mark.parametrize('lots,history', list(itertools.product(LOT_SETS, HISTORIES)))
    def test_properties(self, lots, history):
        count, by_lot = history
        caps = {l.id: l.purchase_cap for l in lots}

        for quantity in range(1, 8):
            result = allocate(quantity, lots, count, by_lot)

            if not result.can_add:
                assert result.distribution == ()
                assert result.total_price == 0
                continue

            # all-or-nothing
            assert sum(l.quantity for l in result.distribution) == quantity
            # total equals sum of value x units
            assert result.total_price == sum(l.value * l.quantity for l in result.distribution)
            for allocated in result.distribution:
                cap = caps[allocated.price_id]
                if cap == 0:
                    # one lifetime unit per agency and product
                    assert count == 0
                    assert allocated.quantity == 1
                else:
                    assert allocated.quantity + by_lot.get(allocated.price_id, 0) <= cap
            single_unit_lots = [l for l in result.distribution if caps[l.price_id] == 0]
            assert len(single_unit_lots) <= 1
            # batches never go backwards
            batches = [l.batch for l in result.distribution]
            assert batches == sorted(batches)

    def test_deterministic(self):
        lots = [lot(1, 10, 2, 1), lot(2, 20, 1, 2), lot(3, 30, 3, 0)]

        first = allocate(3, lots, 0, {})
        second = allocate(3, list(lots), 0, {})

        assert first == second
