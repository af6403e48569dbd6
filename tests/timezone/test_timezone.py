"""
tests/timezone/test_timezone.py

Covers:
  - Identifier parsing (UTC/GMT, fixed offsets, IANA names, unknown names)
  - Fixed-offset zones
  - IANA offsets (raw and daylight saving) around transitions
  - Local → absolute resolution in folds and gaps
  - next_transition probing
  - Lookups outside the datetime range
"""

from __future__ import annotations

import pytest

from calkit.timezone import (
    FixedOffsetZone,
    RepeatedTimePolicy,
    TimeBasis,
    TimeZoneError,
    TimeZoneRules,
    UnknownTimeZoneError,
    ZoneInfoRules,
    time_zone_for,
)

# 2023-03-12 10:00:00Z, the spring-forward instant in Los Angeles.
SPRING = 1678615200
# 2023-11-05 09:00:00Z, the fall-back instant.
FALL = 1699174800


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def la():
    return time_zone_for("America/Los_Angeles")


@pytest.fixture
def la_basis(la):
    return TimeBasis(la)


# ── Identifiers ───────────────────────────────────────────────────────────────

class TestTimeZoneFor:

    @pytest.mark.parametrize("identifier", ["UTC", "GMT"])
    def test_utc(self, identifier):
        zone = time_zone_for(identifier)
        assert isinstance(zone, FixedOffsetZone)
        assert zone.utc_offset(0.0) == 0
        assert zone.identifier == identifier

    @pytest.mark.parametrize(
        "identifier, seconds",
        [
            ("GMT+01:00", 3600),
            ("UTC-8", -8 * 3600),
            ("GMT+0530", 5 * 3600 + 30 * 60),
            ("UTC+14", 14 * 3600),
        ],
    )
    def test_fixed_offsets(self, identifier, seconds):
        zone = time_zone_for(identifier)
        assert isinstance(zone, FixedOffsetZone)
        assert zone.seconds == seconds

    def test_iana(self, la):
        assert isinstance(la, ZoneInfoRules)
        assert isinstance(la, TimeZoneRules)
        assert la.identifier == "America/Los_Angeles"

    def test_unknown(self):
        with pytest.raises(UnknownTimeZoneError, match="Mars/Olympus_Mons"):
            time_zone_for("Mars/Olympus_Mons")

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            time_zone_for("Not/AZone")


class TestFixedOffsetZone:

    def test_generated_identifier(self):
        assert FixedOffsetZone(0).identifier == "GMT"
        assert FixedOffsetZone(3600).identifier == "GMT+0100"
        assert FixedOffsetZone(-(9 * 3600 + 30 * 60)).identifier == "GMT-0930"

    def test_offsets(self):
        zone = FixedOffsetZone(-28800)
        assert zone.raw_offset(1e9) == -28800
        assert zone.dst_offset(1e9) == 0
        assert zone.next_transition(0.0) is None

    def test_out_of_range(self):
        with pytest.raises(TimeZoneError):
            FixedOffsetZone(19 * 3600)

    def test_equality(self):
        assert FixedOffsetZone(3600) == FixedOffsetZone(3600, "GMT+01:00")
        assert len({FixedOffsetZone(3600), FixedOffsetZone(3600)}) == 1


# ── IANA rules ────────────────────────────────────────────────────────────────

class TestZoneInfoRules:

    def test_offsets_around_spring_forward(self, la):
        assert la.utc_offset(SPRING - 1) == -8 * 3600
        assert la.utc_offset(SPRING) == -7 * 3600
        assert la.raw_offset(SPRING) == -8 * 3600
        assert la.dst_offset(SPRING) == 3600
        assert la.dst_offset(SPRING - 1) == 0

    def test_offsets_around_fall_back(self, la):
        assert la.utc_offset(FALL - 1) == -7 * 3600
        assert la.utc_offset(FALL) == -8 * 3600

    def test_next_transition(self, la):
        assert la.next_transition(SPRING - 30 * 86400) == SPRING
        assert la.next_transition(SPRING) == FALL

    def test_next_transition_none_within_horizon(self):
        assert time_zone_for("Asia/Tokyo").next_transition(1e9) is None

    def test_far_future_and_past_are_clamped(self, la):
        assert la.utc_offset(1e15) in (-8 * 3600, -7 * 3600)
        assert isinstance(la.utc_offset(-1e15), int)

    def test_equality(self, la):
        assert la == ZoneInfoRules("America/Los_Angeles")
        assert la != ZoneInfoRules("Europe/Amsterdam")


# ── TimeBasis ─────────────────────────────────────────────────────────────────

class TestTimeBasis:

    def test_offsets_pair(self, la_basis):
        assert la_basis.offsets(1697439600.0) == (-28800, 3600)

    def test_to_local(self, la_basis):
        assert la_basis.to_local(1697439600.0) == 1697439600.0 - 7 * 3600

    def test_unambiguous_round_trip(self, la_basis):
        at = 1697439600.0
        assert la_basis.to_absolute(la_basis.to_local(at)) == at

    def test_fold(self, la_basis):
        local = la_basis.to_local(FALL - 1800)  # 01:30 PDT
        assert la_basis.to_absolute(local) == FALL - 1800
        assert la_basis.to_absolute(local, repeated=RepeatedTimePolicy.LATTER) == FALL + 1800

    def test_gap(self, la_basis):
        # 02:30 on 2023-03-12 does not exist.
        local = la_basis.to_local(SPRING - 1800) + 3600
        assert la_basis.to_absolute(local) == SPRING + 1800
        assert la_basis.to_absolute(local, skipped=RepeatedTimePolicy.LATTER) == SPRING - 1800

    def test_fixed_zone(self):
        basis = TimeBasis(FixedOffsetZone(3600))
        assert basis.to_absolute(7200.0) == 3600.0
        assert basis.utc_offset(0.0) == 3600
