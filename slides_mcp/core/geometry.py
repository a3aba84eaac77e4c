"""
Unit conversion between points and EMU (English Metric Units), plus scale math
for resizing page elements.
"""

from typing import Optional, Tuple

from slides_mcp.utils.exceptions import ObjectStateError

EMU_PER_POINT = 12700


def points_to_emu(points: float) -> float:
    """Convert points to EMU. 1 pt = 12700 EMU."""
    return points * EMU_PER_POINT


def emu_to_points(emu: float) -> float:
    """Convert EMU to points."""
    return emu / EMU_PER_POINT


def compute_scale_from_target_size(
    current_width: Optional[float],
    current_height: Optional[float],
    target_width: Optional[float] = None,
    target_height: Optional[float] = None
) -> Tuple[float, float]:
    """
    Compute the scale factors that take an element from its current size
    to a target size.

    The result is multiplicative: callers multiply the transform's existing
    scaleX/scaleY by these factors. With only one target dimension the same factor
    is used on both axes, so the aspect ratio is kept.

    Args:
        current_width: Current width in EMU (size magnitude)
        current_height: Current height in EMU (size magnitude)
        target_width: Target width in points (optional)
        target_height: Target height in points (optional)

    Returns:
        (scale_x, scale_y) factors

    Raises:
        ObjectStateError: If a needed current dimension is missing or not positive
    """
    if target_width is None and target_height is None:
        return 1.0, 1.0

    def _require(value: Optional[float], axis: str) -> float:
        if value is None or value <= 0:
            raise ObjectStateError(
                f"cannot resize object: current {axis} is unknown"
            )
        return value

    if target_width is not None and target_height is not None:
        width = _require(current_width, "width")
        height = _require(current_height, "height")
        return points_to_emu(target_width) / width, points_to_emu(target_height) / height

    if target_width is not None:
        factor = points_to_emu(target_width) / _require(current_width, "width")
    else:
        factor = points_to_emu(target_height) / _require(current_height, "height")
    return factor, factor
