from __future__ import annotations

from .rules import RepeatedTimePolicy, TimeZoneRules


class TimeBasis:
    """
    Offsets between absolute time and local wall-clock seconds for one zone.

    Local seconds are wall-clock seconds counted from 1970-01-01T00:00 local.
    Mapping local seconds back to absolute time resolves repeated readings
    (folds) and skipped readings (gaps) with independent policies, and never
    fails.  In a gap, FORMER interprets the reading with the offset in force
    before the transition, which lands after the gap.
    """

    def __init__(self, rules: TimeZoneRules) -> None:
        self._rules = rules

    @property
    def rules(self) -> TimeZoneRules:
        return self._rules

    def offsets(self, at: float) -> tuple[int, int]:
        """(raw offset, daylight-saving offset) in seconds at an instant."""
        return self._rules.raw_offset(at), self._rules.dst_offset(at)

    def utc_offset(self, at: float) -> int:
        return self._rules.utc_offset(at)

    def to_local(self, at: float) -> float:
        return at + self._rules.utc_offset(at)

    def to_absolute(
        self,
        local_seconds: float,
        repeated: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
        skipped: RepeatedTimePolicy = RepeatedTimePolicy.FORMER,
    ) -> float:
        former = self._rules.offset_for_local(local_seconds, RepeatedTimePolicy.FORMER)
        latter = self._rules.offset_for_local(local_seconds, RepeatedTimePolicy.LATTER)
        if former == latter:
            return local_seconds - former

        # A fold when both candidates read back as the same wall time.
        is_fold = (
            self._rules.utc_offset(local_seconds - former) == former
            and self._rules.utc_offset(local_seconds - latter) == latter
        )
        policy = repeated if is_fold else skipped
        offset = former if policy is RepeatedTimePolicy.FORMER else latter
        return local_seconds - offset

    def __repr__(self) -> str:
        return f"TimeBasis(rules={self._rules!r})"
