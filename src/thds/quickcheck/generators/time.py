"""Generators of points in time: aware UTC datetimes, fixed clocks, and dates.

Range endpoints are always parsed in one canonical format - ISO-8601 instants such as
`1970-01-01T00:00:00Z` (ISO dates for `DateGenerator`). `InRange.format` is accepted and ignored;
this is a deliberate simplification, not an oversight. The zone is always UTC and is not configurable.
"""

import re
import typing as ty
from datetime import date, datetime, timedelta, timezone, tzinfo

import attrs

from thds.core import log

from ..errors import ConfigurationError
from ..generator import GenerationStatus, Generator
from ..metadata import InRange
from ..randomness import SourceOfRandomness
from .registry import register_generator

T = ty.TypeVar("T")

logger = log.getLogger(__name__)

UTC = timezone.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MIN_INSTANT = datetime.min.replace(tzinfo=UTC)
MAX_INSTANT = datetime.max.replace(tzinfo=UTC)
_ONE_SECOND = timedelta(seconds=1)
_MAX_MICROSECOND = 999_999
_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


def epoch_second(instant: datetime) -> int:
    # floored, so the microsecond component is never negative
    return (instant - EPOCH) // _ONE_SECOND


def from_epoch(seconds: int, microseconds: int) -> datetime:
    return EPOCH + timedelta(seconds=seconds, microseconds=microseconds)


def _normalize_fraction(match: re.Match) -> str:
    digits = match.group(1)
    if digits[6:].strip("0"):
        raise ValueError(f"fractional seconds .{digits} are finer than a microsecond")
    return "." + digits[:6].ljust(6, "0")


def parse_instant(raw: ty.Any) -> datetime:
    """Parse an ISO-8601 instant; an explicit UTC offset (or `Z`) is required.

    Any number of fractional digits is accepted, but precision below a microsecond can't be
    represented, so nonzero digits past the sixth are a parse failure rather than silently dropped."""
    if isinstance(raw, datetime):
        value = raw
    else:
        text = str(raw).strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(_FRACTION.sub(_normalize_fraction, text, count=1))
    if value.utcoffset() is None:
        raise ValueError(f"{raw!r} is not an instant: it has no UTC offset")
    return value.astimezone(UTC)


def parse_date(raw: ty.Any) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw).strip())


@attrs.frozen
class FixedClock:
    """A clock that always reports the same instant."""

    instant: datetime
    zone: tzinfo = UTC

    def now(self, tz: ty.Optional[tzinfo] = None) -> datetime:
        return self.instant.astimezone(tz or self.zone)

    def timestamp(self) -> float:
        return self.instant.timestamp()


class _TimePointGenerator(Generator[T]):
    """Uniform sampling over a closed interval of UTC instants.

    Epoch seconds and microseconds are drawn independently: seconds over
    [min.seconds, max.seconds] and microseconds over [min.microsecond, max.microsecond]. The joint
    distribution is therefore only approximately uniform when the interval spans more than one second
    and its endpoints have different sub-second parts. This is long-standing behavior and is kept as is.
    If the endpoints' microseconds are inverted (e.g. 00:00:00.5 to 00:00:01.2), no independent draw
    can stay in bounds, so microseconds are drawn over the whole second and the result is clamped.
    """

    def __init__(self, *types: ty.Any):
        super().__init__(*types)
        self.min = MIN_INSTANT
        self.max = MAX_INSTANT

    def _configure(self, range: InRange) -> None:
        lo, hi = self.min, self.max
        try:
            if range.min is not None:
                lo = parse_instant(range.min)
            if range.max is not None:
                hi = parse_instant(range.max)
        except (ValueError, OverflowError) as err:
            raise ConfigurationError(
                f"cannot parse range endpoint as an ISO-8601 instant: {err}", range.min, range.max
            ) from err

        if lo > hi:
            raise ConfigurationError(f"bad range, {range.min} > {range.max}", range.min, range.max)

        self.min, self.max = lo, hi
        logger.debug("Configured instant range", generator=self, min=lo.isoformat(), max=hi.isoformat())

    def _sample(self, random: SourceOfRandomness) -> datetime:
        seconds = random.next_long(epoch_second(self.min), epoch_second(self.max))
        lo_micros, hi_micros = self.min.microsecond, self.max.microsecond
        if lo_micros <= hi_micros:
            return from_epoch(seconds, random.next_long(lo_micros, hi_micros))

        instant = from_epoch(seconds, random.next_long(0, _MAX_MICROSECOND))
        return min(max(instant, self.min), self.max)


@register_generator("instant")
class InstantGenerator(_TimePointGenerator[datetime]):
    """Produces timezone-aware UTC datetimes."""

    def __init__(self):
        super().__init__(datetime)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> datetime:
        return self._sample(random)


@register_generator("clock")
class ClockGenerator(_TimePointGenerator[FixedClock]):
    """Produces fixed UTC clocks.

    Configure with ISO-8601 instant strings; an endpoint left unset defaults to the earliest or latest
    representable instant, so that an unconfigured generator covers the whole domain.
    """

    def __init__(self):
        super().__init__(FixedClock)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> FixedClock:
        return FixedClock(self._sample(random), UTC)


@register_generator("date")
class DateGenerator(Generator[date]):
    def __init__(self):
        super().__init__(date)
        self.min = date.min
        self.max = date.max

    def _configure(self, range: InRange) -> None:
        lo, hi = self.min, self.max
        try:
            if range.min is not None:
                lo = parse_date(range.min)
            if range.max is not None:
                hi = parse_date(range.max)
        except ValueError as err:
            raise ConfigurationError(
                f"cannot parse range endpoint as an ISO-8601 date: {err}", range.min, range.max
            ) from err

        if lo > hi:
            raise ConfigurationError(f"bad range, {range.min} > {range.max}", range.min, range.max)

        self.min, self.max = lo, hi
        logger.debug("Configured date range", generator=self, min=lo.isoformat(), max=hi.isoformat())

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> date:
        return date.fromordinal(random.next_long(self.min.toordinal(), self.max.toordinal()))
