"""
Receipt arithmetic.

    subtotal = Σ qty × price
    total    = subtotal + shipping − discount

Form input arrives as strings, numbers or nothing at all; any value that is
not a finite number counts as zero. Values too large for the amount
columns are rejected with AmountOutOfRangeError.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ..exceptions import AmountOutOfRangeError

ZERO = Decimal('0')
CENTS = Decimal('0.01')

# Amount columns are DecimalField(max_digits=14, decimal_places=2)
MAX_AMOUNT = Decimal(10) ** 12


def to_decimal(value) -> Decimal:
    """
    Coerce a form value to Decimal, treating non-numeric input as zero.

        >>> to_decimal('500')
        Decimal('500')
        >>> to_decimal('')
        Decimal('0')
        >>> to_decimal('abc')
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO

    if not result.is_finite():
        return ZERO
    return result


def line_total(item) -> Decimal:
    """qty × price for one line item."""
    return to_decimal(item.get('qty')) * to_decimal(item.get('price'))


def calculate_totals(items, shipping=None, discount=None) -> dict:
    """
    Compute the money figures printed on a receipt.

    Args:
        items: Iterable of mappings with 'qty' and 'price' keys.
        shipping: Shipping fee (added).
        discount: Discount (subtracted).

    Returns:
        dict with Decimal 'subtotal', 'shipping', 'discount' and 'total',
        each rounded to two decimal places.

    Example:
        >>> totals = calculate_totals(
        ...     [{'qty': 2, 'price': 500}, {'qty': 1, 'price': 1000}],
        ...     shipping=200,
        ...     discount=100,
        ... )
        >>> totals['subtotal'], totals['total']
        (Decimal('2000.00'), Decimal('2100.00'))

    Raises:
        AmountOutOfRangeError: If a line or a total is too large to store
    """
    lines = []
    for item in items or []:
        _check_range(to_decimal(item.get('qty')))
        _check_range(to_decimal(item.get('price')))
        lines.append(line_total(item))
        _check_range(lines[-1])
    subtotal = sum(lines, ZERO)
    shipping = to_decimal(shipping)
    discount = to_decimal(discount)
    total = subtotal + shipping - discount

    return {
        'subtotal': _round(subtotal),
        'shipping': _round(shipping),
        'discount': _round(discount),
        'total': _round(total),
    }


def format_amount(currency, value) -> str:
    """
    Format a money value for display with thousands separators.

    Whole amounts drop their decimals (``₦2,100``); fractional amounts keep
    two places (``₦2,100.50``).
    """
    value = _round(to_decimal(value))
    if value == value.to_integral_value():
        text = f"{int(value):,}"
    else:
        text = f"{value:,.2f}"
    return f"{currency or ''}{text}"


def to_amount(value) -> Decimal:
    """
    Coerce a form value to a storable money amount (two places).

    Raises:
        AmountOutOfRangeError: If the value does not fit an amount column
    """
    return _round(to_decimal(value))


def _check_range(value: Decimal) -> None:
    if abs(value) >= MAX_AMOUNT:
        raise AmountOutOfRangeError(
            f"Amounts must be smaller than {MAX_AMOUNT:,}"
        )


def _round(value: Decimal) -> Decimal:
    _check_range(value)
    rounded = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    _check_range(rounded)
    return rounded
