"""
analytics.amounts

Exact decimal rendering of raw token amounts. Raw amounts are integers in
base units; the human value is raw / 10**decimals.
"""
import math


def shorten(addr: str, chars: int = 4) -> str:
    if not addr:
        return ""
    if len(addr) > chars * 2 + 3:
        return f"{addr[:chars + 2]}…{addr[-chars:]}"
    return addr


def format_ui_amount(amount_raw: int, decimals: int) -> str:
    """
    Plain form: trailing fractional zeros stripped, no decimal point for whole values.
    """
    sign = "-" if amount_raw < 0 else ""
    whole, frac = divmod(abs(int(amount_raw)), 10 ** decimals)
    if frac == 0:
        return f"{sign}{whole}"
    frac_str = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{sign}{whole}.{frac_str}"


def format_ui_amount_fixed(amount_raw_str: str, decimals: int, places: int = 2) -> str:
    """
    Fixed form with exactly `places` fractional digits, rounded half up.
    Falls back to float formatting only when the raw value is not an integer string.
    """
    try:
        text = str(amount_raw_str).strip()
        amount_raw = int(text) if text else 0
    except ValueError:
        try:
            num = float(amount_raw_str) / (10 ** decimals)
        except (TypeError, ValueError, OverflowError):
            return "0.00"
        return f"{num:.{places}f}" if math.isfinite(num) else "0.00"

    sign = "-" if amount_raw < 0 else ""
    mul = 10 ** places
    denom = 10 ** decimals
    q, r = divmod(abs(amount_raw) * mul, denom)
    rounded = q + 1 if r * 2 >= denom else q
    whole, frac = divmod(rounded, mul)
    if places <= 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{str(frac).rjust(places, '0')}"


__all__ = ["shorten", "format_ui_amount", "format_ui_amount_fixed"]
