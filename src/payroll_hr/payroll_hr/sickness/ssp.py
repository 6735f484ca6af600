"""Statutory Sick Pay day counting over linked PIW chains."""
from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import iter_days
from ..core.constants import SSP_MAX_WEEKS, SSP_WAITING_DAYS
from ..work_patterns.model import QualifyingPattern
from .model import Chain


def ssp_entitled_days(days_per_week: int) -> int:
    return SSP_MAX_WEEKS * days_per_week


def count_ssp_days_in_range_for_chain(
    chain: Chain,
    qualifying: QualifyingPattern,
    days_per_week: int,
    range_start: date,
    range_end: date,
) -> int:
    """SSP-paid days of one chain that fall inside ``[range_start, range_end]``.

    Waiting days and the cap are counted over the whole chain, so days outside
    the range still consume them.
    """
    cap = ssp_entitled_days(days_per_week)
    cap_used = 0
    qualifying_seen = 0
    used_in_range = 0

    for span in chain.spans:
        for day in iter_days(span.start, span.end):
            if not qualifying.is_qualifying(day):
                continue
            qualifying_seen += 1
            if qualifying_seen > SSP_WAITING_DAYS and cap_used < cap:
                cap_used += 1
                if range_start <= day <= range_end:
                    used_in_range += 1

    return used_in_range


def count_ssp_days_in_range(
    chains: Iterable[Chain],
    qualifying: QualifyingPattern,
    days_per_week: int,
    range_start: date,
    range_end: date,
) -> int:
    return sum(
        count_ssp_days_in_range_for_chain(c, qualifying, days_per_week, range_start, range_end)
        for c in chains
    )
