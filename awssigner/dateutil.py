"""
Strict timestamp parse and format utilities.
"""
from datetime import datetime
from pytz import FixedOffset, UTC
from re import compile as re_compile

# Formats used by SigV4
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
DATESTAMP_FORMAT = "%Y%m%d"

# ISO 8601 timestamp format regex (includes RFC 3339)
_iso_8601_regex = re_compile(
    r"^(?P<year>[0-9]{4})-?"
    r"(?P<month>0[1-9]|1[0-2])-?"
    r"(?P<day>0[1-9]|[12][0-9]|3[01])"
    r"[Tt ]"
    r"(?P<hour>[01][0-9]|2[0-3]):?"
    r"(?P<minute>[0-5][0-9]):?"
    r"(?P<second>[0-5][0-9]|6[01])"
    r"(?P<frac_sec>[\.,][0-9]+)?"
    r"(?P<timezone>[-+][01][0-9]:?[0-5][0-9]|[Zz])$")

def parse_iso8601(s):
    """
    Parse a timestamp formatted in ISO 8601 timestamp format and return a
    timezone-aware datetime. If the string is not a valid ISO 8601 timestamp,
    None is returned.

    ISO 8601 timestamps include the forms:
        2018-12-25T14:00:00-08:00
        20181225T140000-0800            (Condensed)
        2018-12-25T22:00:00Z            (Z == +0000, UTC)
        20181225T220000Z                (Condensed; the X-Amz-Date form)
        20181225 220000Z                (Space instead of T)

    If fractional seconds are included, they are ignored.
    """
    m = _iso_8601_regex.match(s)
    if not m:
        return None

    zone = m.group("timezone")
    if zone in ("Z", "z"):
        offset = UTC
    else:
        zone = zone.replace(":", "")
        assert len(zone) == 5
        sign = zone[0]
        offset_hour = int(zone[1:3])
        offset_minutes = offset_hour * 60 + int(zone[3:5])

        if sign == "-":
            offset_minutes = -offset_minutes

        offset = FixedOffset(offset_minutes)

    return datetime(
        year=int(m.group("year")),
        month=int(m.group("month")),
        day=int(m.group("day")),
        hour=int(m.group("hour")),
        minute=int(m.group("minute")),
        second=int(m.group("second")),
        tzinfo=offset)

def to_utc(timestamp):
    """
    to_utc(timestamp) -> datetime

    Normalize a signing timestamp to an aware UTC datetime. The timestamp may
    be a datetime (naive values are taken to already be in UTC) or an ISO 8601
    string. If timestamp is None, the current time is used.

    A ValueError exception is raised if a string is not valid ISO 8601, and
    a TypeError exception if timestamp is any other type.
    """
    if timestamp is None:
        return datetime.now(UTC)

    if isinstance(timestamp, str):
        parsed = parse_iso8601(timestamp)
        if parsed is None:
            raise ValueError(
                "Timestamp is not a valid ISO 8601 string: %r" % timestamp)
        timestamp = parsed

    if not isinstance(timestamp, datetime):
        raise TypeError(
            "Expected timestamp to be a datetime or string: %r" %
            type(timestamp).__name__)

    if timestamp.tzinfo is None:
        return UTC.localize(timestamp)

    return timestamp.astimezone(UTC)

def amz_date(timestamp):
    """
    The full ISO 8601 basic form (YYYYMMDD'T'HHMMSS'Z') used in the
    X-Amz-Date header and the string to sign.
    """
    return to_utc(timestamp).strftime(AMZ_DATE_FORMAT)

def datestamp(timestamp):
    """
    The date-only form (YYYYMMDD) used in the credential scope.
    """
    return to_utc(timestamp).strftime(DATESTAMP_FORMAT)
