from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..common.datetime_utils import parse_timestamp
from ..core import flags
from ..core.enums import DeviceKind
from ..core.exceptions import PunchFormatError
from ..rules.model import TimeRuleConfig
from .model import DuplicatePunch, NormalizedPunches, Punch, RawPunch, RejectedPunch

logger = logging.getLogger(__name__)

BATHROOM_ENTRY_LABEL = "Bathroom Entry"
BATHROOM_EXIT_LABEL = "Bathroom Exit"
CLOCK_IN_LABELS = ("Clock In", "Clock-In", "ClockIn")
CLOCK_OUT_LABELS = ("Clock Out", "Clock-Out", "ClockOut")


def classify_device(label: str) -> DeviceKind:
    """Resolve a device label to its kind. Matching is case-sensitive."""
    label = label or ""
    if BATHROOM_ENTRY_LABEL in label:
        return DeviceKind.BATHROOM_ENTRY
    if BATHROOM_EXIT_LABEL in label:
        return DeviceKind.BATHROOM_EXIT
    if any(token in label for token in CLOCK_IN_LABELS):
        return DeviceKind.MAIN_IN
    if any(token in label for token in CLOCK_OUT_LABELS):
        return DeviceKind.MAIN_OUT
    return DeviceKind.MAIN_UNKNOWN


class PunchNormalizer:
    """Parse, sort, split and de-duplicate the punches of one employee-day."""

    def __init__(self, config: TimeRuleConfig):
        self._main_window = timedelta(minutes=config.main_clock_duplicate_minutes)
        self._bathroom_window = timedelta(seconds=config.bathroom_duplicate_seconds)

    def to_punch(self, raw: RawPunch, work_date: date | None = None) -> Punch:
        try:
            ts = parse_timestamp(raw.timestamp)
        except (TypeError, ValueError) as exc:
            raise PunchFormatError(str(exc)) from exc
        if work_date is not None and ts.date() != work_date:
            raise PunchFormatError(f"punch at {ts:%Y-%m-%d %H:%M} does not belong to {work_date:%Y-%m-%d}")
        return Punch(
            person_ref=raw.person_ref,
            device_label=raw.device_label,
            kind=classify_device(raw.device_label),
            time=ts,
        )

    def normalize(self, raws: Iterable[RawPunch], work_date: date | None = None) -> NormalizedPunches:
        parsed: list[Punch] = []
        rejected: list[RejectedPunch] = []
        for raw in raws:
            try:
                parsed.append(self.to_punch(raw, work_date))
            except PunchFormatError as exc:
                logger.warning("Dropping unreadable punch %r: %s", raw, exc)
                rejected.append(RejectedPunch(raw=raw, reason=str(exc)))

        parsed.sort(key=lambda p: p.time)
        main = [p for p in parsed if not p.kind.is_bathroom]
        bathroom = [p for p in parsed if p.kind.is_bathroom]

        main_kept, main_dupes = self._dedupe(main, self._main_window, same_kind_only=False)
        bath_kept, bath_dupes = self._dedupe(bathroom, self._bathroom_window, same_kind_only=True)
        for d in main_dupes + bath_dupes:
            logger.info(
                "Filtered duplicate punch %s (%s) for %s, kept %s",
                d.punch.time.strftime("%H:%M:%S"), d.punch.device_label, d.punch.person_ref,
                d.kept.time.strftime("%H:%M:%S"),
            )

        return NormalizedPunches(
            main=tuple(main_kept),
            bathroom=tuple(bath_kept),
            duplicates=tuple(main_dupes + bath_dupes),
            rejected=tuple(rejected),
            flags=(flags.UNREADABLE_PUNCH,) if rejected else (),
        )

    @staticmethod
    def _dedupe(
        punches: Sequence[Punch], window: timedelta, *, same_kind_only: bool
    ) -> tuple[list[Punch], list[DuplicatePunch]]:
        # Compared against the last kept punch so re-running on the output removes nothing.
        kept: list[Punch] = []
        dupes: list[DuplicatePunch] = []
        last_by_key: dict[object, Punch] = {}
        for p in punches:
            key = p.kind if same_kind_only else None
            prev = last_by_key.get(key)
            if prev is not None and p.time - prev.time < window:
                dupes.append(DuplicatePunch(punch=p, kept=prev))
                continue
            kept.append(p)
            last_by_key[key] = p
        return kept, dupes
