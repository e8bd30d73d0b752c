from __future__ import annotations

import pytest

from keycap_outline.units import (
    DOT_PER_INCH,
    DOT_PER_MM,
    DOT_PER_UNIT,
    INCH_PER_UNIT,
    MM_PER_INCH,
    MM_PER_UNIT,
    Conversion,
    Dot,
    FontUnit,
    Inch,
    KeyUnit,
    Length,
    Mm,
    font_conversion,
)


def test_unit_markers_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Mm()


def test_standard_factors():
    assert DOT_PER_UNIT.factor == 1000.0
    assert MM_PER_UNIT.factor == pytest.approx(19.05)
    assert INCH_PER_UNIT.factor == pytest.approx(0.75)
    assert DOT_PER_MM.factor == pytest.approx(1000.0 / 19.05)
    assert DOT_PER_INCH.factor == pytest.approx(1000.0 / 0.75)
    assert DOT_PER_MM.source is Mm and DOT_PER_MM.target is Dot


def test_mm_per_inch_agrees_with_key_unit_factors():
    via_key_units = INCH_PER_UNIT.inverse().then(MM_PER_UNIT)
    assert via_key_units.source is Inch
    assert via_key_units.factor == pytest.approx(MM_PER_INCH.factor)


def test_conversion_inverse_round_trips():
    conv = Conversion(KeyUnit, Mm, 19.05)
    assert conv.inverse().apply(conv.apply(3.5)) == pytest.approx(3.5)
    assert conv.inverse().source is Mm


def test_conversion_chain_rejects_mismatched_units():
    with pytest.raises(ValueError, match="Cannot chain"):
        MM_PER_UNIT.then(MM_PER_INCH)


def test_length_arithmetic():
    a = Length(3.0)
    b = Length(1.5)
    assert (a + b).value == 4.5
    assert (a - b).value == 1.5
    assert (a * 2.0).value == 6.0
    assert (2.0 * a).value == 6.0
    assert (a / 2.0).value == 1.5
    assert a / b == 2.0
    assert (-a).value == -3.0
    assert abs(Length(-2.0)).value == 2.0
    assert b < a and a >= b
    assert a.min(b) == b and a.max(b) == a
    assert a.lerp(b, 0.5).value == pytest.approx(2.25)
    assert Length.zero().value == 0.0


def test_length_convert_and_is_close():
    inch = Length(1.0)
    assert inch.convert(MM_PER_INCH).is_close(Length(25.4))
    assert not Length(1.0).is_close(Length(1.001))


def test_font_conversion():
    conv = font_conversion(1000, Length(12.0), Dot)
    assert conv.source is FontUnit
    assert conv.target is Dot
    assert conv.apply(500.0) == pytest.approx(6.0)


@pytest.mark.parametrize("units_per_em", [0, -100])
def test_font_conversion_rejects_non_positive_em(units_per_em):
    with pytest.raises(ValueError):
        font_conversion(units_per_em, Length(12.0), Dot)
