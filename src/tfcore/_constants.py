"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Config node names and keys
# ------------------------------------------------------------------

PART_NODE = "FLIGHTDATA_PART"
DATA_NODE = "FLIGHTDATA"
SETTINGS_NODE = "TESTFLIGHT_SETTINGS"

PART_NAME_KEY = "partName"
SCOPE_KEY = "scope"
FLIGHT_DATA_KEY = "flightData"
PACKED_STRING_KEY = "partPackedString"

# ------------------------------------------------------------------
# Packed string codec
# ------------------------------------------------------------------

NAME_SEPARATOR = ":"
RECORD_SEPARATOR = " "
FIELD_SEPARATOR = ","
RESERVED_FIELD = "0"
PACKED_FIELD_COUNT = 3

# Characters the packed form cannot carry inside a scope.
SCOPE_RESERVED_CHARS = frozenset({RECORD_SEPARATOR, FIELD_SEPARATOR, NAME_SEPARATOR})

# Integral floats beyond this magnitude keep their repr form (e.g. ``1e+16``).
_INTEGRAL_LIMIT = 1e16


def format_number(value: float) -> str:
    """Render a float the way the persisted formats expect.

    Integral values print without a fractional part (``15`` rather than
    ``15.0``); everything else uses the shortest text that parses back to
    the same float.
    """
    number = float(value)
    if number.is_integer() and abs(number) < _INTEGRAL_LIMIT:
        return str(int(number))
    return repr(number)


def check_part_name(part_name: str) -> str:
    """Return *part_name* unchanged, or raise ``ValueError`` if it holds a name separator."""
    if NAME_SEPARATOR in part_name:
        raise ValueError(f"part name must not contain {NAME_SEPARATOR!r}: {part_name!r}")
    return part_name
