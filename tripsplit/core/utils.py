from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Anything smaller than this is a settled balance.
EPSILON = Decimal("0.000001")

# Keeps sums of many amounts quantizable to cents within the 28-digit context.
MAX_AMOUNT = Decimal("1000000000000000")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """
    Coerce an int / float / str / Decimal to a finite Decimal.

    Floats go through str() so 0.1 stays 0.1 and not 0.1000000000000000055...
    Raises ValueError for anything else (None, bools, NaN, inf, garbage,
    magnitudes of MAX_AMOUNT and up).
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"{value!r} is not a number")

    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float, str)):
        try:
            d = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"{value!r} is not a number") from None
    else:
        raise ValueError(f"{value!r} is not a number")

    if not d.is_finite():
        raise ValueError(f"{value!r} is not a finite number")

    if abs(d) >= MAX_AMOUNT:
        raise ValueError(f"{value!r} is out of range")

    try:
        qround(d)
    except InvalidOperation:
        raise ValueError(f"{value!r} cannot be rounded to cents") from None

    return d


def is_settled(amount: Decimal) -> bool:
    return abs(amount) < EPSILON
