from decimal import Decimal, InvalidOperation

_BINARY_SUFFIXES = {
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("0.000000001"),
    "u": Decimal("0.000001"),
    "m": Decimal("0.001"),
    "k": Decimal(1000),
    "M": Decimal(1000) ** 2,
    "G": Decimal(1000) ** 3,
    "T": Decimal(1000) ** 4,
    "P": Decimal(1000) ** 5,
    "E": Decimal(1000) ** 6,
}

BYTES_PER_GIB = Decimal(1024) ** 3


def parse_quantity(quantity) -> Decimal:
    """
    Parse kubernetes quantity to Decimal.
    Adapted from kubernetes-python utils.

    Returns Decimal(0) for None, empty or malformed quantities instead of raising.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, bool):
        return Decimal(0)
    quantity = str(quantity).strip()
    if not quantity:
        return Decimal(0)

    number = quantity
    multiplier = Decimal(1)
    if quantity[-2:] in _BINARY_SUFFIXES:
        number = quantity[:-2]
        multiplier = _BINARY_SUFFIXES[quantity[-2:]]
    elif quantity[-1] in _DECIMAL_SUFFIXES:
        number = quantity[:-1]
        multiplier = _DECIMAL_SUFFIXES[quantity[-1]]

    try:
        value = Decimal(number)
    except (InvalidOperation, ValueError):
        return Decimal(0)

    if not value.is_finite():
        return Decimal(0)

    return value * multiplier


def to_cores(quantity) -> float:
    """Converts a K8s CPU quantity to cores.

    "123456789n" is nanocores (raw / 1e9), "3920m" is millicores (raw / 1000),
    a bare number is whole cores.
    """
    return float(parse_quantity(quantity))


def to_gib(quantity) -> float:
    """Converts a K8s memory quantity to GiB ("16384Ki" -> raw / 1,048,576)."""
    return float(parse_quantity(quantity) / BYTES_PER_GIB)
