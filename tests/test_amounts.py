import pytest

from analytics.amounts import format_ui_amount, format_ui_amount_fixed, shorten


@pytest.mark.parametrize("raw,dec,expected", [
    (1000, 6, "0.001"),
    (500, 6, "0.0005"),
    (1_000_000, 6, "1"),
    (1_500_000, 6, "1.5"),
    (0, 9, "0"),
    (123, 0, "123"),
    (10 ** 30 + 1, 9, "1000000000000000000000.000000001"),
])
def test_format_ui_amount(raw, dec, expected):
    assert format_ui_amount(raw, dec) == expected


def test_format_ui_amount_no_trailing_zeros():
    for raw in (10, 100, 1200, 1230, 99990, 10 ** 20):
        for dec in range(0, 12):
            s = format_ui_amount(raw, dec)
            if "." in s:
                assert not s.endswith("0")
                assert not s.endswith(".")
            # exact: scaling back reproduces the raw integer
            whole, _, frac = s.partition(".")
            assert int(whole + frac.ljust(dec, "0")) == raw


def test_format_fixed_half_up():
    assert format_ui_amount_fixed("125", 2, 1) == "1.3"
    assert format_ui_amount_fixed("124", 2, 1) == "1.2"
    assert format_ui_amount_fixed("1005", 3, 2) == "1.01"
    assert format_ui_amount_fixed("1004", 3, 2) == "1.00"


def test_format_fixed_pads_places():
    assert format_ui_amount_fixed("1000000", 6) == "1.00"
    assert format_ui_amount_fixed("5", 0, 4) == "5.0000"
    assert format_ui_amount_fixed("1", 9, 3) == "0.000"
    assert format_ui_amount_fixed("999", 3, 2) == "1.00"


def test_format_fixed_always_exact_places():
    for raw in ("0", "7", "123456789", str(2 ** 80)):
        for dec in (0, 3, 9):
            for places in (1, 2, 5):
                frac = format_ui_amount_fixed(raw, dec, places).split(".")[1]
                assert len(frac) == places


def test_format_fixed_large_values_exact():
    raw = str(2 ** 70)  # beyond 64 bit
    assert format_ui_amount_fixed(raw, 0, 2) == f"{2 ** 70}.00"


def test_format_fixed_fallbacks():
    assert format_ui_amount_fixed("12.5", 1, 2) == "1.25"
    assert format_ui_amount_fixed("not-a-number", 2) == "0.00"
    assert format_ui_amount_fixed("inf", 2) == "0.00"
    assert format_ui_amount_fixed("1.5", 400) == "0.00"


def test_shorten():
    addr = "So11111111111111111111111111111111111111112"
    assert shorten(addr) == "So1111…1112"
    assert shorten("short") == "short"
    assert shorten("") == ""
