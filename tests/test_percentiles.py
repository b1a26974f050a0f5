"""
Tests for default growth percentile curves.
"""

import pytest

from mumpa_admin.growth import CALIBRATION, build_percentile_curve, get_anchors
from mumpa_admin.models import MeasurementType, Sex

ALL_PAIRS = [(t, s) for t in MeasurementType for s in Sex]


class TestCurveShape:

    @pytest.mark.parametrize("measurement_type,sex", ALL_PAIRS)
    def test_27_weekly_points(self, measurement_type, sex):
        points = build_percentile_curve(measurement_type, sex, 26)
        assert len(points) == 27
        assert [p.age_weeks for p in points] == list(range(27))

    def test_default_horizon_is_26_weeks(self):
        assert len(build_percentile_curve("height", "M")) == 27

    def test_zero_weeks_gives_start_anchor_only(self):
        points = build_percentile_curve("head", "F", 0)
        anchors = get_anchors("head", "F")
        assert len(points) == 1
        assert (points[0].p3, points[0].p50, points[0].p97) == (anchors.start.p3, anchors.start.p50, anchors.start.p97)

    def test_custom_horizon(self):
        points = build_percentile_curve(MeasurementType.WEIGHT, Sex.MALE, 52)
        assert len(points) == 53
        assert points[-1].age_weeks == 52


class TestInterpolation:

    @pytest.mark.parametrize("measurement_type,sex", ALL_PAIRS)
    def test_endpoints_match_anchors(self, measurement_type, sex):
        points = build_percentile_curve(measurement_type, sex)
        anchors = CALIBRATION[(measurement_type, sex)]
        for point, anchor in ((points[0], anchors.start), (points[26], anchors.end)):
            assert point.p3 == pytest.approx(anchor.p3)
            assert point.p50 == pytest.approx(anchor.p50)
            assert point.p97 == pytest.approx(anchor.p97)

    def test_midpoint_is_average(self):
        points = build_percentile_curve("weight", "F")
        assert points[13].p3 == pytest.approx((2.4 + 5.8) / 2)
        assert points[13].p50 == pytest.approx((3.2 + 7.2) / 2)
        assert points[13].p97 == pytest.approx((4.0 + 8.6) / 2)

    @pytest.mark.parametrize("total_weeks", [0, 1, 7, 26, 104])
    @pytest.mark.parametrize("measurement_type,sex", ALL_PAIRS)
    def test_band_ordering_holds_everywhere(self, measurement_type, sex, total_weeks):
        for p in build_percentile_curve(measurement_type, sex, total_weeks):
            assert p.p3 <= p.p50 <= p.p97

    def test_calibration_table_is_ordered(self):
        assert len(CALIBRATION) == 6
        for pair in CALIBRATION.values():
            for anchor in (pair.start, pair.end):
                assert anchor.p3 <= anchor.p50 <= anchor.p97

    def test_deterministic(self):
        assert build_percentile_curve("height", "F") == build_percentile_curve("height", "F")

    def test_strings_and_enums_are_equivalent(self):
        assert build_percentile_curve("head", "M") == build_percentile_curve(MeasurementType.HEAD, Sex.MALE)


class TestUnsupported:

    def test_unknown_type_returns_empty(self):
        assert build_percentile_curve("bone", "F") == []

    def test_unknown_sex_returns_empty(self):
        assert build_percentile_curve("weight", "X") == []

    def test_negative_weeks_returns_empty(self):
        assert build_percentile_curve("weight", "F", -1) == []

    def test_unknown_pair_has_no_anchors(self):
        assert get_anchors("bone", "F") is None


class TestDocumentShape:

    def test_points_serialize_with_age_weeks_key(self):
        doc = build_percentile_curve("weight", "M")[1].to_document()
        assert set(doc) == {"ageWeeks", "p3", "p50", "p97"}
        assert doc["ageWeeks"] == 1
