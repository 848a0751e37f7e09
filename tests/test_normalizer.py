import pytest

from calc_engine import Normalizer as N
from calc_engine import ScientificEngine


def test_replace_constants():
    constants = ScientificEngine.CONSTANTS
    assert N.replace_constants("2pi", constants) == "2(3.141592653589793)"
    assert N.replace_constants("π+∞", constants) == "(3.141592653589793)+(Infinity)"
    # Only whole letter runs are replaced
    assert N.replace_constants("exp(1)", constants) == "exp(1)"
    assert N.replace_constants("pix", constants) == "pix"


def test_replace_custom_constant():
    constants = dict(ScientificEngine.CONSTANTS, g=9.81)
    assert N.replace_constants("2g", constants) == "2(9.81)"


def test_expand_scientific():
    assert N.expand_scientific("1.5E2+1") == "150+1"
    assert N.expand_scientific("2E-3") == "0.002"
    assert N.expand_scientific("4E+1") == "40"
    assert N.expand_scientific("1E21") == "1000000000000000000000"


@pytest.mark.parametrize("raw, reduced", [
    ("1--2", "1+2"),
    ("1++2", "1+2"),
    ("1-+2", "1-2"),
    ("1+-2", "1-2"),
    ("1---2", "1-2"),
    ("1+-+-2", "1+2"),
    ("--3", "+3"),
])
def test_reduce_signs(raw, reduced):
    assert N.reduce_signs(raw) == reduced


def test_replace_special_operators():
    assert N.replace_special_operators("√9") == "(2)˅9"
    assert N.replace_special_operators("∛8") == "(3)˅8"
    assert N.replace_special_operators("∜16") == "(4)˅16"
    assert N.replace_special_operators("3˟√27") == "3˅27"
    assert N.replace_special_operators("2²") == "2^(2)"
    assert N.replace_special_operators("2³") == "2^(3)"
    assert N.replace_special_operators("sin{-1}(0.5)") == "asin(0.5)"
    assert N.replace_special_operators("cos{-1}(1)+tan{-1}(1)") == "acos(1)+atan(1)"


def test_stacked_root_glyphs_are_left_alone():
    # The outer glyph is followed by another root glyph
    assert N.replace_special_operators("√√16") == "√(2)˅16"


@pytest.mark.parametrize("raw, expected", [
    ("2(3+4)", "2*(3+4)"),
    ("(1)(2)", "(1)*(2)"),
    ("2x", "2*x"),
    ("(2)3", "(2)*3"),
    ("2sin(30)", "2*sin(30)"),
    ("x2", "x2"),
    ("(2)x", "(2)x"),
])
def test_insert_multiplication(raw, expected):
    assert N.insert_multiplication(raw) == expected


def test_normalize_runs_all_steps():
    assert N.normalize("2 (3 + 4)") == "2*(3+4)"
    assert N.normalize("2pi") == "2*(3.141592653589793)"
    assert N.normalize("1.5E2 + 1") == "150+1"
    assert N.normalize("√9") == "(2)˅9"
    assert N.normalize("2 - - 3") == "2+3"


@pytest.mark.parametrize("raw", ["2(3+4)", "2pi", "√9+∛-8", "sin{-1}(1)", "1.5E2--1", "3x²"])
def test_normalize_is_idempotent(raw):
    canonical = N.normalize(raw)
    assert N.normalize(canonical) == canonical


def test_normalize_emits_checkpoints_in_order():
    events = []
    N.normalize("2 pi", trace=lambda stage, value: events.append((stage, value)))

    assert [stage for stage, _ in events] == [
        "initial-expression",
        "fix-replace-constant",
        "fix-white-spaces",
        "fix-scientific-notation",
        "fix-operators-reduction",
        "fix-replace-special-operators",
        "fix-multiplication-without-operator",
    ]
    assert events[-1][1] == "2*(3.141592653589793)"
