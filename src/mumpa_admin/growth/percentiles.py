"""
Default growth percentile curves for the first six months.

Each curve is a straight line per percentile band between a birth anchor
(week 0) and a week-26 anchor. Values are reference constants, not fitted.
"""

import logging

from mumpa_admin.models import AnchorPair, CurvePoint, MeasurementType, PercentileAnchor, Sex

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_WEEKS = 26


def _pair(start: tuple[float, float, float], end: tuple[float, float, float]) -> AnchorPair:
    return AnchorPair(
        start=PercentileAnchor(p3=start[0], p50=start[1], p97=start[2]),
        end=PercentileAnchor(p3=end[0], p50=end[1], p97=end[2]),
    )


# (type, sex) -> start/end anchors, p3/p50/p97
CALIBRATION: dict[tuple[MeasurementType, Sex], AnchorPair] = {
    (MeasurementType.WEIGHT, Sex.FEMALE): _pair((2.4, 3.2, 4.0), (5.8, 7.2, 8.6)),
    (MeasurementType.WEIGHT, Sex.MALE): _pair((2.5, 3.3, 4.1), (6.0, 7.5, 9.0)),
    (MeasurementType.HEIGHT, Sex.FEMALE): _pair((46.5, 49.1, 52.0), (60.5, 65.0, 69.5)),
    (MeasurementType.HEIGHT, Sex.MALE): _pair((47.0, 49.9, 53.0), (61.5, 66.5, 71.0)),
    (MeasurementType.HEAD, Sex.FEMALE): _pair((32.0, 34.0, 36.0), (40.0, 42.0, 44.0)),
    (MeasurementType.HEAD, Sex.MALE): _pair((32.5, 34.5, 36.5), (40.5, 42.5, 44.5)),
}


def get_anchors(measurement_type: MeasurementType | str, sex: Sex | str) -> AnchorPair | None:
    """Calibration anchors for the pair, or None if the pair is unsupported."""
    try:
        key = (MeasurementType(measurement_type), Sex(sex))
    except ValueError:
        return None
    return CALIBRATION.get(key)


def build_percentile_curve(
    measurement_type: MeasurementType | str,
    sex: Sex | str,
    total_weeks: int = DEFAULT_TOTAL_WEEKS,
) -> list[CurvePoint]:
    """
    Weekly points from week 0 to total_weeks inclusive.
    Returns an empty list when no calibration exists for (measurement_type, sex);
    callers must treat that as "no data", not as a valid curve.
    """
    anchors = get_anchors(measurement_type, sex)
    if anchors is None:
        logger.warning("No percentile calibration for type=%s sex=%s", measurement_type, sex)
        return []

    start, end = anchors.start, anchors.end
    points: list[CurvePoint] = []
    for week in range(total_weeks + 1):
        ratio = 0 if total_weeks == 0 else week / total_weeks
        points.append(
            CurvePoint(
                age_weeks=week,
                p3=start.p3 + (end.p3 - start.p3) * ratio,
                p50=start.p50 + (end.p50 - start.p50) * ratio,
                p97=start.p97 + (end.p97 - start.p97) * ratio,
            )
        )
    return points
