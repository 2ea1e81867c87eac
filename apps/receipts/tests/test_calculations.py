from decimal import Decimal

import pytest

from apps.receipts.services.calculations import (
    calculate_totals,
    format_amount,
    to_decimal,
    to_amount,
)
from apps.receipts.exceptions import AmountOutOfRangeError


class TestToDecimal:

    @pytest.mark.parametrize('value, expected', [
        (500, Decimal('500')),
        ('500', Decimal('500')),
        (' 12.5 ', Decimal('12.5')),
        (2.5, Decimal('2.5')),
        ('', Decimal('0')),
        (None, Decimal('0')),
        ('abc', Decimal('0')),
        ('NaN', Decimal('0')),
        ('Infinity', Decimal('0')),
        (True, Decimal('0')),
    ])
    def test_coercion(self, value, expected):
        assert to_decimal(value) == expected


class TestCalculateTotals:

    def test_worked_example(self):
        totals = calculate_totals(
            [{'qty': 2, 'price': 500}, {'qty': 1, 'price': 1000}],
            shipping=200,
            discount=100,
        )

        assert totals['subtotal'] == Decimal('2000.00')
        assert totals['shipping'] == Decimal('200.00')
        assert totals['discount'] == Decimal('100.00')
        assert totals['total'] == Decimal('2100.00')

    def test_string_form_values(self):
        totals = calculate_totals(
            [{'qty': '3', 'price': '250'}],
            shipping='50',
            discount='',
        )

        assert totals['subtotal'] == Decimal('750.00')
        assert totals['total'] == Decimal('800.00')

    def test_non_numeric_values_count_as_zero(self):
        totals = calculate_totals(
            [
                {'qty': 'two', 'price': 500},
                {'qty': 1, 'price': ''},
                {'qty': None, 'price': None},
                {'name': 'no numbers at all'},
                {'qty': 1, 'price': 300},
            ],
            shipping='free',
            discount=None,
        )

        assert totals['subtotal'] == Decimal('300.00')
        assert totals['shipping'] == Decimal('0.00')
        assert totals['discount'] == Decimal('0.00')
        assert totals['total'] == Decimal('300.00')

    def test_empty_items(self):
        totals = calculate_totals([], shipping=100, discount=0)

        assert totals['subtotal'] == Decimal('0.00')
        assert totals['total'] == Decimal('100.00')

    def test_discount_larger_than_subtotal_goes_negative(self):
        totals = calculate_totals([{'qty': 1, 'price': 100}], discount=150)

        assert totals['total'] == Decimal('-50.00')

    @pytest.mark.parametrize('items, shipping, discount', [
        ([{'qty': 1, 'price': '19.99'}, {'qty': 3, 'price': '0.01'}], '5', '2.5'),
        ([{'qty': '4', 'price': 125}], 0, 0),
        ([{'qty': 7, 'price': 'x'}, {'qty': 2, 'price': 49.5}], None, '9'),
    ])
    def test_total_is_subtotal_plus_shipping_minus_discount(self, items, shipping, discount):
        totals = calculate_totals(items, shipping=shipping, discount=discount)

        expected_subtotal = sum(
            (to_decimal(i.get('qty')) * to_decimal(i.get('price')) for i in items),
            Decimal('0'),
        )
        assert totals['subtotal'] == expected_subtotal.quantize(Decimal('0.01'))
        assert totals['total'] == totals['subtotal'] + totals['shipping'] - totals['discount']


class TestAmountRange:

    def test_largest_storable_amount(self):
        totals = calculate_totals([{'qty': 1, 'price': '999999999999.99'}])

        assert totals['total'] == Decimal('999999999999.99')

    @pytest.mark.parametrize('items, shipping', [
        ([{'qty': 1000000, 'price': 1000000000}], 0),
        ([{'qty': '1e30', 'price': 1}], 0),
        ([{'qty': 0, 'price': '1e30'}], 0),
        ([{'qty': 1, 'price': 10}], '1e12'),
        ([{'qty': 1, 'price': '999999999999.999'}], 0),
    ])
    def test_too_large(self, items, shipping):
        with pytest.raises(AmountOutOfRangeError):
            calculate_totals(items, shipping=shipping)

    def test_to_amount(self):
        assert to_amount('700.456') == Decimal('700.46')
        assert to_amount('abc') == Decimal('0.00')

        with pytest.raises(AmountOutOfRangeError):
            to_amount('-1e13')

class TestFormatAmount:

    def test_whole_amount(self):
        assert format_amount('₦', Decimal('2100')) == '₦2,100'

    def test_fractional_amount(self):
        assert format_amount('₦', '2100.5') == '₦2,100.50'

    def test_large_amount(self):
        assert format_amount('$', 1234567) == '$1,234,567'

    def test_missing_currency(self):
        assert format_amount(None, 50) == '50'
