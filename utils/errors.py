"""Error taxonomy for decoding, scaling and conversion failures."""


class PnmError(Exception):
    """Base class for all pnmdump failures."""


class FormatError(PnmError, ValueError):
    """Header/body grammar violation or encoding mismatch."""


class ParseError(PnmError, ValueError):
    """Scale expression does not match any accepted grammar."""


class RangeError(PnmError, ValueError):
    """Scale factors invalid, inconsistent, or output too large."""


class OutOfBoundsError(PnmError, IndexError):
    """Raster dimensions or cell index outside the supported canvas."""
