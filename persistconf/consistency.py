"""Parsing of cassandra consistency level names.

The set of valid names belongs to the driver; this module only decides how names are matched and which error is
raised when they don't.
"""

from cassandra import ConsistencyLevel

from .exceptions import BadConsistency, BadSerialConsistency

SERIAL_CONSISTENCY_LEVELS: dict[str, int] = {
    name: ConsistencyLevel.name_to_value[name]
    for name in ("SERIAL", "LOCAL_SERIAL")
}
"""Levels accepted for conditional (compare-and-set) operations"""

CONSISTENCY_LEVELS: dict[str, int] = {
    name: value
    for name, value in ConsistencyLevel.name_to_value.items()
    if name not in SERIAL_CONSISTENCY_LEVELS
}
"""Levels accepted for regular reads and writes"""


def parse_consistency(name: str) -> int:
    """Convert a consistency level name into the driver's value.

    Names are matched exactly as given, so ``local_quorum`` is rejected.

    Raises:
        BadConsistency: if the name isn't a known consistency level.
    """
    try:
        return CONSISTENCY_LEVELS[name]
    except (KeyError, TypeError):
        raise BadConsistency(name) from None


def parse_serial_consistency(name: str) -> int:
    """Convert a serial consistency level name into the driver's value. Matching ignores case.

    Raises:
        BadSerialConsistency: if the name isn't ``SERIAL`` or ``LOCAL_SERIAL``.
    """
    try:
        return SERIAL_CONSISTENCY_LEVELS[name.upper()]
    except (KeyError, AttributeError):
        raise BadSerialConsistency(name) from None
