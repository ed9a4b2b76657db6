import copy
import math
import pickle
from fractions import Fraction

import pytest

from framecalculator import FrameRate, InvalidFrameRate


@pytest.mark.parametrize(
    "rate,expected",
    [
        (FrameRate.FPS_23_976, 24000 / 1001),
        (FrameRate.FPS_24, 24.0),
        (FrameRate.FPS_25, 25.0),
        (FrameRate.FPS_29_97_DF, 30000 / 1001),
        (FrameRate.FPS_29_97_NDF, 30000 / 1001),
        (FrameRate.FPS_30, 30.0),
        (FrameRate.FPS_50, 50.0),
        (FrameRate.FPS_59_94, 60000 / 1001),
        (FrameRate.FPS_60, 60.0),
    ],
)
def test_frames_per_second(rate, expected):
    """frames_per_second is the true rate."""
    assert rate.frames_per_second == pytest.approx(expected, abs=1e-4)


def test_exact_frames_per_second_is_a_ratio():
    assert FrameRate.FPS_23_976.exact_frames_per_second == Fraction(24000, 1001)
    assert FrameRate.FPS_59_94.exact_frames_per_second == Fraction(60000, 1001)
    assert FrameRate.FPS_25.exact_frames_per_second == 25


@pytest.mark.parametrize(
    "rate,expected",
    [
        (FrameRate.FPS_23_976, 24),
        (FrameRate.FPS_24, 24),
        (FrameRate.FPS_25, 25),
        (FrameRate.FPS_29_97_DF, 30),
        (FrameRate.FPS_29_97_NDF, 30),
        (FrameRate.FPS_30, 30),
        (FrameRate.FPS_50, 50),
        (FrameRate.FPS_59_94, 60),
        (FrameRate.FPS_60, 60),
    ],
)
def test_nominal_frame_rate(rate, expected):
    assert rate.nominal_frame_rate == expected


def test_custom_nominal_frame_rate_rounds_half_up():
    assert FrameRate.custom(48.5).nominal_frame_rate == 49
    assert FrameRate.custom(48.4).nominal_frame_rate == 48
    assert FrameRate.custom(12.5).nominal_frame_rate == 13


def test_custom_nominal_frame_rate_is_at_least_one():
    assert FrameRate.custom(0.3).nominal_frame_rate == 1


def test_only_29_97_df_is_drop_frame():
    drop_frame = [r for r in FrameRate.all_standard_rates() if r.is_drop_frame]
    assert drop_frame == [FrameRate.FPS_29_97_DF]
    assert not FrameRate.custom(29.97).is_drop_frame


@pytest.mark.parametrize(
    "rate,expected",
    [
        (FrameRate.FPS_23_976, "23.976"),
        (FrameRate.FPS_24, "24"),
        (FrameRate.FPS_25, "25"),
        (FrameRate.FPS_29_97_DF, "29.97 DF"),
        (FrameRate.FPS_29_97_NDF, "29.97 NDF"),
        (FrameRate.FPS_30, "30"),
        (FrameRate.FPS_50, "50"),
        (FrameRate.FPS_59_94, "59.94"),
        (FrameRate.FPS_60, "60"),
    ],
)
def test_display_name(rate, expected):
    assert rate.display_name == expected
    assert str(rate) == expected


def test_custom_display_and_accessibility_name():
    rate = FrameRate.custom(47.952)
    assert rate.display_name == "48"
    assert rate.accessibility_name == "48 frames per second, custom"
    assert FrameRate.FPS_29_97_DF.accessibility_name == "29.97 drop frame"


def test_all_standard_rates():
    rates = FrameRate.all_standard_rates()
    assert len(rates) == 9
    assert rates[0] == FrameRate.FPS_23_976
    assert rates[-1] == FrameRate.FPS_60
    assert all(not r.is_custom for r in rates)


@pytest.mark.parametrize("value", [0, -1, -0.001, 1000.001, 5000, math.nan, math.inf])
def test_custom_out_of_range_raises(value):
    with pytest.raises(InvalidFrameRate):
        FrameRate.custom(value)


@pytest.mark.parametrize("value", ["48", None, True])
def test_custom_non_number_raises(value):
    with pytest.raises(InvalidFrameRate):
        FrameRate.custom(value)


def test_custom_upper_bound_is_inclusive():
    rate = FrameRate.custom(1000)
    assert rate.frames_per_second == 1000.0
    assert rate.custom_value == 1000.0


def test_equality():
    assert FrameRate.FPS_24 == FrameRate.FPS_24
    assert FrameRate.FPS_24 != FrameRate.FPS_25
    assert FrameRate.FPS_29_97_DF != FrameRate.FPS_29_97_NDF
    assert FrameRate.custom(48.0) == FrameRate.custom(48.0)
    assert FrameRate.custom(48.0) != FrameRate.custom(50.0)
    assert FrameRate.custom(24.0) != FrameRate.FPS_24
    assert FrameRate.FPS_24 != 24


def test_hash():
    rates = {FrameRate.FPS_24, FrameRate.FPS_24, FrameRate.FPS_30}
    assert len(rates) == 2
    rates.add(FrameRate.custom(48.0))
    rates.add(FrameRate.custom(48.0))
    assert len(rates) == 3


def test_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        FrameRate("fps24", Fraction(30), 30)
    assert FrameRate.custom(30.0) != FrameRate.FPS_24


def test_immutable():
    with pytest.raises(AttributeError):
        FrameRate.FPS_24._nominal = 25
    with pytest.raises(AttributeError):
        FrameRate.custom(48.0).foo = 1
    assert FrameRate.FPS_24.nominal_frame_rate == 24


def test_pickle_and_copy():
    assert pickle.loads(pickle.dumps(FrameRate.FPS_29_97_DF)) is FrameRate.FPS_29_97_DF
    custom = FrameRate.custom(47.952)
    assert pickle.loads(pickle.dumps(custom)) == custom
    assert copy.deepcopy(custom) == custom


def test_repr():
    assert repr(FrameRate.FPS_29_97_DF) == "FrameRate.FPS_29_97_DF"
    assert repr(FrameRate.FPS_23_976) == "FrameRate.FPS_23_976"
    assert repr(FrameRate.custom(48.0)) == "FrameRate.custom(48.0)"


@pytest.mark.parametrize(
    "fps,expected",
    [
        (23.976, FrameRate.FPS_23_976),
        (23.98, FrameRate.FPS_23_976),
        (24000 / 1001, FrameRate.FPS_23_976),
        (24.0, FrameRate.FPS_24),
        (25.001, FrameRate.FPS_25),
        (29.97, FrameRate.FPS_29_97_NDF),
        (30000 / 1001, FrameRate.FPS_29_97_NDF),
        (30.0, FrameRate.FPS_30),
        (50.0, FrameRate.FPS_50),
        (59.94, FrameRate.FPS_59_94),
        (60.0, FrameRate.FPS_60),
    ],
)
def test_from_fps_matches_standard_rates(fps, expected):
    assert FrameRate.from_fps(fps) == expected


def test_from_fps_falls_back_to_custom():
    rate = FrameRate.from_fps(48.0)
    assert rate.is_custom
    assert rate == FrameRate.custom(48.0)


@pytest.mark.parametrize(
    "value,expected",
    [
        (FrameRate.FPS_50, FrameRate.FPS_50),
        ("fps29_97_df", FrameRate.FPS_29_97_DF),
        ("29.97 DF", FrameRate.FPS_29_97_DF),
        ("29.97 ndf", FrameRate.FPS_29_97_NDF),
        ("29.97", FrameRate.FPS_29_97_NDF),
        ("24", FrameRate.FPS_24),
        (" 25 ", FrameRate.FPS_25),
        ("24000/1001", FrameRate.FPS_23_976),
        ((30000, 1001), FrameRate.FPS_29_97_NDF),
        (25, FrameRate.FPS_25),
        (59.94, FrameRate.FPS_59_94),
        (Fraction(60000, 1001), FrameRate.FPS_59_94),
    ],
)
def test_coerce(value, expected):
    assert FrameRate.coerce(value) == expected


@pytest.mark.parametrize("value", ["bogus", "", "24/0", 0, -25, None, (1, 0), True])
def test_coerce_invalid_raises(value):
    with pytest.raises(InvalidFrameRate):
        FrameRate.coerce(value)


def test_to_dict():
    assert FrameRate.FPS_29_97_DF.to_dict() == {"type": "fps29_97_df"}
    assert FrameRate.custom(47.952).to_dict() == {
        "type": "custom",
        "custom_value": 47.952,
    }


@pytest.mark.parametrize(
    "rate", FrameRate.all_standard_rates() + [FrameRate.custom(47.952)]
)
def test_from_dict_restores_the_stored_rate(rate):
    assert FrameRate.from_dict(rate.to_dict()) == rate


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"type": "fps31"},
        {"type": "custom"},
        {"type": "custom", "custom_value": -1.0},
        None,
    ],
)
def test_from_dict_invalid_raises(data):
    with pytest.raises(InvalidFrameRate):
        FrameRate.from_dict(data)


@pytest.mark.parametrize("fps", ["abc", "", None, [24]])
def test_from_fps_rejects_non_numbers(fps):
    with pytest.raises(InvalidFrameRate):
        FrameRate.from_fps(fps)


def test_from_fps_rejects_nan():
    with pytest.raises(InvalidFrameRate):
        FrameRate.from_fps(math.nan)
