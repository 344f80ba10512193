import math

from sortpar.config import SortStrategy
from sortpar.stages.keys import (
    VersionKey,
    general_numeric_key,
    key_of,
    natural_compare,
    natural_key,
    version_compare,
)


def test_lexicographic_key_is_identity():
    assert key_of("abc", SortStrategy.LEXICOGRAPHIC) == "abc"


def test_general_numeric_unparseable_is_zero():
    assert key_of("abc", SortStrategy.GENERAL_NUMERIC) == key_of("", SortStrategy.GENERAL_NUMERIC) == 0.0


def test_general_numeric_parses_leading_prefix():
    assert general_numeric_key("3.5x") == 3.5
    assert general_numeric_key("  -2e3 apples") == -2000.0
    assert general_numeric_key("+.5") == 0.5
    assert general_numeric_key("7.") == 7.0
    assert general_numeric_key("1e") == 1.0
    assert general_numeric_key("x3") == 0.0
    assert general_numeric_key("1_000") == 1.0


def test_general_numeric_infinity_and_nan():
    assert general_numeric_key("inf") == math.inf
    assert general_numeric_key("-Infinity") == -math.inf
    assert general_numeric_key("nan") == 0.0
    assert general_numeric_key("NaN") == general_numeric_key("junk")


def test_natural_key_orders_digit_runs_by_value():
    assert natural_key("item2") < natural_key("item10")
    assert sorted(["a10", "a2", "a1b", "a1"], key=natural_key) == ["a1", "a1b", "a2", "a10"]
    assert natural_compare("file9", "file10") == -1
    assert natural_compare("x", "x") == 0


def test_natural_key_digit_before_text_at_same_position():
    assert natural_key("1abc") < natural_key("abc")
    assert natural_key("") < natural_key("a")


def test_version_compare_uses_version_precedence():
    assert version_compare("1.2", "1.10") == -1
    assert version_compare("v2.0", "1.9.9") == 1
    assert version_compare("1.0", "1.0.0") == 0
    assert version_compare("1.0rc1", "1.0") == -1


def test_version_compare_falls_back_to_natural_order():
    assert version_compare("v1.2", "not-a-version") == natural_compare("v1.2", "not-a-version")
    assert version_compare("not-a-version", "v1.2") == natural_compare("not-a-version", "v1.2")
    assert version_compare("abc2", "abc10") == -1


def test_version_key_orders_through_version_compare():
    keys = [key_of(t, SortStrategy.VERSION_ORDER) for t in ["1.10", "1.2", "1.9"]]
    assert all(isinstance(k, VersionKey) for k in keys)
    assert [k.text for k in sorted(keys)] == ["1.2", "1.9", "1.10"]
    assert VersionKey("1.0") == VersionKey("1.0.0")


def test_natural_key_treats_non_decimal_digits_as_text():
    assert natural_key("²") == ((1, "²", "²"),)
    assert natural_key("a1") < natural_key("a1²")
    assert natural_compare("x²", "x2") == 1


def test_natural_key_compares_decimal_digits_from_any_script():
    assert natural_compare("٣", "5") == -1
    assert natural_compare("item٣", "item10") == -1
    # same value: the raw digits break the tie
    assert natural_compare("3", "٣") == -1
    assert natural_compare("007", "7") == -1


def test_natural_key_handles_digit_runs_of_any_length():
    huge = "1" * 5000
    assert natural_compare(huge, "2") == 1
    assert natural_compare("2", huge) == -1
    assert natural_compare(huge, huge) == 0
    assert natural_compare(huge + "0", huge + "1") == -1


def test_version_compare_handles_oversized_release_segments():
    huge = "1." + "9" * 5000
    assert version_compare(huge, "1.2") == natural_compare(huge, "1.2") == 1
    assert version_compare("1.2", huge) == -1
    assert key_of("1.2", SortStrategy.VERSION_ORDER) < key_of(huge, SortStrategy.VERSION_ORDER)
