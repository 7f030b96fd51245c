"""Scale expression parsing and validation."""

import logging
import math
import re
from typing import Optional, Tuple

from models.scale_spec import ScaleSpec, DirectionHint
from models.transform_kind import TransformKind, Interpolation
from utils.constants import MAX_OUTPUT_WIDTH, MAX_OUTPUT_HEIGHT
from utils.errors import ParseError, RangeError

logger = logging.getLogger(__name__)

_NUM = r'\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'

# Tried in order; each must consume the whole expression
_SINGLE = re.compile(_NUM)
_RATIO = re.compile(_NUM + '/' + _NUM)
_PAIR = re.compile(_NUM + 'x' + _NUM)
_RATIO_PAIR = re.compile(_NUM + '/' + _NUM + 'x' + _NUM + '/' + _NUM)


def _ratio(numerator: str, denominator: str) -> float:
    x, y = float(numerator), float(denominator)
    if y == 0:
        return math.nan if x == 0 else math.copysign(math.inf, x)
    return x / y


def _split_hint(text: str) -> Tuple[Optional[DirectionHint], str]:
    for hint in DirectionHint:
        if text.startswith(hint.value):
            return hint, text[1:]
    return None, text


def parse_scale(text: str) -> ScaleSpec:
    """
    Parse `N`, `N/D`, `WxH` or `Nw/DwxNh/Dh` into a ScaleSpec.

    A leading `m` or `p` is kept as a direction hint and otherwise
    ignored. The result is not validated; see `validate_scale`.
    """
    hint, body = _split_hint(text)

    match = _SINGLE.fullmatch(body)
    if match:
        factor = float(match.group(1))
        return ScaleSpec(factor, factor, hint)

    match = _RATIO.fullmatch(body)
    if match:
        factor = _ratio(*match.groups())
        return ScaleSpec(factor, factor, hint)

    match = _PAIR.fullmatch(body)
    if match:
        return ScaleSpec(float(match.group(1)), float(match.group(2)), hint)

    match = _RATIO_PAIR.fullmatch(body)
    if match:
        w_num, w_den, h_num, h_den = match.groups()
        return ScaleSpec(_ratio(w_num, w_den), _ratio(h_num, h_den), hint)

    logger.debug("Scale expression %r matches no grammar", text)
    raise ParseError("bad scalar format")


def validate_scale(spec: ScaleSpec) -> ScaleSpec:
    """Reject non-positive, non-finite or mixed-direction factors."""
    if not spec.is_finite or spec.width_factor <= 0 or spec.height_factor <= 0:
        raise RangeError("scalar must be a non zero positive")
    if not (spec.is_upscale or spec.is_downscale):
        raise RangeError("inconsistent direction")
    return spec


def scaled_dimensions(spec: ScaleSpec, width: int, height: int) -> Tuple[int, int]:
    """Output (width, height) for an input size, capped at 1920x1080."""
    if not (math.isfinite(width * spec.width_factor) and math.isfinite(height * spec.height_factor)):
        raise RangeError("output too large")
    out_width, out_height = spec.output_size(width, height)
    if out_width > MAX_OUTPUT_WIDTH or out_height > MAX_OUTPUT_HEIGHT:
        logger.debug("Scaled size %dx%d exceeds cap", out_width, out_height)
        raise RangeError("output too large")
    return out_width, out_height


def select_scale_transform(spec: ScaleSpec, interpolation: Interpolation) -> TransformKind:
    if interpolation is Interpolation.NEAREST:
        return TransformKind.SCALE_NEAREST
    if spec.is_upscale:
        return TransformKind.SCALE_BILINEAR_UP
    return TransformKind.SCALE_BOX_DOWN


def parse_and_validate(text: str) -> ScaleSpec:
    return validate_scale(parse_scale(text))
