"""Moment-style date formatting and week arithmetic.

Pure functions, no infrastructure dependencies. Format patterns use the
Moment.js display grammar (English locale) so existing vault conventions
such as ``YYYY-MM-DD`` or ``GGGG - [Week] W`` keep working unchanged.

INVARIANT: Values passed in are never mutated. Every offset returns a new
``datetime``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from dwnotes.errors import FormatError

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Sunday-first, matching Moment's ``d`` token (Sunday = 0).
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# Locale week rules for English: weeks start Sunday, week 1 contains Jan 1.
_LOCALE_DOW = 0
_LOCALE_DOY = 6

# English long date formats. Lowercase variants are the abbreviated forms.
LONG_DATE_FORMATS = {
    "LT": "h:mm A",
    "LTS": "h:mm:ss A",
    "L": "MM/DD/YYYY",
    "LL": "MMMM D, YYYY",
    "LLL": "MMMM D, YYYY h:mm A",
    "LLLL": "dddd, MMMM D, YYYY h:mm A",
    "l": "M/D/YYYY",
    "ll": "MMM D, YYYY",
    "lll": "MMM D, YYYY h:mm A",
    "llll": "ddd, MMM D, YYYY h:mm A",
}

# Bracket literals and escapes are matched too so they are left alone.
_LONG_DATE_PATTERN = re.compile(r"\[[^\[]*\]|\\?(?:LTS|LT|LL?L?L?|l{1,4})")

# Order matters: longer alternatives first, mirroring Moment's tokenizer.
_TOKEN_PATTERN = re.compile(
    r"(?P<literal>\[[^\[]*\])"
    r"|(?P<escaped>\\.)"
    r"|(?P<token>Mo|MM?M?M?|Do|DDDo|DD?D?D?|ddd?d?|do?|w[ow]?|W[oW]?|Qo?"
    r"|YYYYYY|YYYYY|YYYY|YY|Y|gg(?:ggg?)?|GG(?:GGG?)?"
    r"|e|E|a|A|hh?|HH?|kk?|mm?|ss?|S{1,9}|x|X|ZZ?)"
    r"|(?P<other>.)",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# Result value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rendered:
    """Outcome of :func:`try_format` — either text or a :class:`FormatError`."""

    text: str = ""
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def text_or(self, placeholder: str) -> str:
        """Return the rendered text, or *placeholder* when rendering failed."""
        return self.text if self.error is None else placeholder


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ordinal(number: int) -> str:
    """English ordinal: 1st, 2nd, 3rd, 4th, 11th, 12th, 13th, 21st."""
    if (number % 100) // 10 == 1:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    msg = f"Expected a date or datetime, got {type(value).__name__}"
    raise FormatError(msg)


def _day_of_year(value: datetime) -> int:
    return value.timetuple().tm_yday


def _days_in_year(year: int) -> int:
    return (date(year + 1, 1, 1) - date(year, 1, 1)).days


def _first_week_offset(year: int, dow: int, doy: int) -> int:
    first_day = 7 + dow - doy
    sunday_based = date(year, 1, first_day).isoweekday() % 7
    return -((7 + sunday_based - dow) % 7) + first_day - 1


def _weeks_in_year(year: int, dow: int, doy: int) -> int:
    offset = _first_week_offset(year, dow, doy)
    offset_next = _first_week_offset(year + 1, dow, doy)
    return (_days_in_year(year) - offset + offset_next) // 7


def locale_week(value: date | datetime) -> tuple[int, int]:
    """Return ``(week, week_year)`` for English locale weeks (Sunday start)."""
    moment = _as_datetime(value)
    year = moment.year
    week = (_day_of_year(moment) - _first_week_offset(year, _LOCALE_DOW, _LOCALE_DOY) - 1) // 7 + 1
    if week < 1:
        year -= 1
        week += _weeks_in_year(year, _LOCALE_DOW, _LOCALE_DOY)
    elif week > _weeks_in_year(year, _LOCALE_DOW, _LOCALE_DOY):
        week -= _weeks_in_year(year, _LOCALE_DOW, _LOCALE_DOY)
        year += 1
    return week, year


def _hour12(value: datetime) -> int:
    return value.hour % 12 or 12


def _fraction(value: datetime, digits: int) -> str:
    millis = f"{value.microsecond // 1000:03d}"
    return millis[:digits] if digits <= 3 else millis + "0" * (digits - 3)


def _signed_year(year: int, width: int) -> str:
    return f"+{year:0{width}d}"


def _utc_offset(value: datetime, separator: str) -> str:
    """Offset from UTC as ``+HH:mm``. Naive values use the local zone."""
    offset = value.utcoffset() if value.tzinfo is not None else value.astimezone().utcoffset()
    minutes = int((offset or timedelta()).total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def expand_long_date_formats(pattern: str) -> str:
    """Replace ``L``, ``LL``, ``LT`` and friends with their English patterns.

    Bracketed literals and backslash-escaped tokens are kept as written.
    """

    def replace(match: re.Match[str]) -> str:
        text = match.group(0)
        return LONG_DATE_FORMATS.get(text, text)

    return _LONG_DATE_PATTERN.sub(replace, pattern)


_FORMATTERS: dict[str, Callable[[datetime], str]] = {
    # Month
    "M": lambda d: str(d.month),
    "Mo": lambda d: ordinal(d.month),
    "MM": lambda d: f"{d.month:02d}",
    "MMM": lambda d: MONTH_NAMES[d.month - 1][:3],
    "MMMM": lambda d: MONTH_NAMES[d.month - 1],
    # Quarter
    "Q": lambda d: str((d.month - 1) // 3 + 1),
    "Qo": lambda d: ordinal((d.month - 1) // 3 + 1),
    # Day of month / year
    "D": lambda d: str(d.day),
    "Do": lambda d: ordinal(d.day),
    "DD": lambda d: f"{d.day:02d}",
    "DDD": lambda d: str(_day_of_year(d)),
    "DDDo": lambda d: ordinal(_day_of_year(d)),
    "DDDD": lambda d: f"{_day_of_year(d):03d}",
    # Day of week
    "d": lambda d: str(d.isoweekday() % 7),
    "do": lambda d: ordinal(d.isoweekday() % 7),
    "dd": lambda d: DAY_NAMES[d.isoweekday() % 7][:2],
    "ddd": lambda d: DAY_NAMES[d.isoweekday() % 7][:3],
    "dddd": lambda d: DAY_NAMES[d.isoweekday() % 7],
    "e": lambda d: str(d.isoweekday() % 7),
    "E": lambda d: str(d.isoweekday()),
    # Week of year
    "w": lambda d: str(locale_week(d)[0]),
    "wo": lambda d: ordinal(locale_week(d)[0]),
    "ww": lambda d: f"{locale_week(d)[0]:02d}",
    "W": lambda d: str(d.isocalendar()[1]),
    "Wo": lambda d: ordinal(d.isocalendar()[1]),
    "WW": lambda d: f"{d.isocalendar()[1]:02d}",
    # Year
    "Y": lambda d: f"{d.year:04d}",
    "YY": lambda d: f"{d.year % 100:02d}",
    "YYYY": lambda d: f"{d.year:04d}",
    "YYYYY": lambda d: f"{d.year:05d}",
    "YYYYYY": lambda d: _signed_year(d.year, 6),
    "gg": lambda d: f"{locale_week(d)[1] % 100:02d}",
    "gggg": lambda d: f"{locale_week(d)[1]:04d}",
    "ggggg": lambda d: f"{locale_week(d)[1]:05d}",
    "GG": lambda d: f"{d.isocalendar()[0] % 100:02d}",
    "GGGG": lambda d: f"{d.isocalendar()[0]:04d}",
    "GGGGG": lambda d: f"{d.isocalendar()[0]:05d}",
    # Time of day
    "a": lambda d: "am" if d.hour < 12 else "pm",
    "A": lambda d: "AM" if d.hour < 12 else "PM",
    "H": lambda d: str(d.hour),
    "HH": lambda d: f"{d.hour:02d}",
    "h": lambda d: str(_hour12(d)),
    "hh": lambda d: f"{_hour12(d):02d}",
    "k": lambda d: str(d.hour or 24),
    "kk": lambda d: f"{d.hour or 24:02d}",
    "m": lambda d: str(d.minute),
    "mm": lambda d: f"{d.minute:02d}",
    "s": lambda d: str(d.second),
    "ss": lambda d: f"{d.second:02d}",
    # Unix time
    "X": lambda d: str(int(d.timestamp())),
    "x": lambda d: str(int(d.timestamp() * 1000)),
    # Time zone
    "Z": lambda d: _utc_offset(d, ":"),
    "ZZ": lambda d: _utc_offset(d, ""),
}
for _width in range(1, 10):
    _FORMATTERS["S" * _width] = lambda d, n=_width: _fraction(d, n)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_date(value: date | datetime, pattern: str) -> str:
    """Render *value* with a Moment-style *pattern*.

    Long date formats (``LL``, ``LT``, ...) are expanded first. Bracketed
    text (``[Week]``) and backslash-escaped characters are copied verbatim;
    characters that are not tokens pass through unchanged.

    Raises:
        FormatError: If *pattern* is not a string, has an unterminated
            ``[`` literal or a dangling ``\\``, or the date cannot be rendered.
    """
    if not isinstance(pattern, str):
        msg = f"Format pattern must be a string, got {type(pattern).__name__}"
        raise FormatError(msg, pattern=pattern)

    moment = _as_datetime(value)
    parts: list[str] = []
    for match in _TOKEN_PATTERN.finditer(expand_long_date_formats(pattern)):
        kind = match.lastgroup
        text = match.group(0)
        if kind == "literal":
            parts.append(text[1:-1])
        elif kind == "escaped":
            parts.append(text[1])
        elif kind == "token":
            try:
                parts.append(_FORMATTERS[text](moment))
            except (ValueError, OverflowError, OSError) as exc:
                msg = f"Cannot render token {text!r} for {moment.isoformat()}: {exc}"
                raise FormatError(msg, pattern=pattern) from exc
        elif text == "[":
            msg = f"Unterminated '[' literal at position {match.start()} in {pattern!r}"
            raise FormatError(msg, pattern=pattern)
        elif text == "\\":
            msg = f"Dangling escape at end of {pattern!r}"
            raise FormatError(msg, pattern=pattern)
        else:
            parts.append(text)
    return "".join(parts)


def try_format(value: date | datetime, pattern: str) -> Rendered:
    """Like :func:`format_date`, but returns the failure instead of raising."""
    try:
        return Rendered(text=format_date(value, pattern))
    except FormatError as exc:
        return Rendered(error=exc)


def add_days(value: date | datetime, days: int) -> datetime:
    """Return *value* shifted by *days* (negative values subtract)."""
    moment = _as_datetime(value)
    try:
        return moment + timedelta(days=days)
    except OverflowError as exc:
        msg = f"{moment.isoformat()} shifted by {days} day(s) is out of range"
        raise FormatError(msg) from exc


def add_weeks(value: date | datetime, weeks: int) -> datetime:
    """Return *value* shifted by *weeks* (negative values subtract)."""
    return add_days(value, weeks * 7)


def iso_weekday(value: date | datetime, weekday: int) -> datetime:
    """Roll *value* to *weekday* (1 = Monday … 7 = Sunday) of its ISO week."""
    moment = _as_datetime(value)
    return add_days(moment, weekday - moment.isoweekday())
