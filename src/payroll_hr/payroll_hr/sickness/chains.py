"""Periods of Incapacity for Work (PIWs) and the 56-day linking rule."""
from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import days_between
from ..core.constants import PIW_LINKING_GAP_DAYS, PIW_MIN_QUALIFYING_DAYS
from ..work_patterns.model import QualifyingPattern
from .model import Chain, SicknessRecord, SicknessSpan
from .working_days import count_qualifying_days_between


def build_spans(records: Iterable[SicknessRecord], qualifying: QualifyingPattern) -> list[SicknessSpan]:
    return [
        SicknessSpan(
            start=r.start_date,
            end=r.effective_end,
            qualifying_days=count_qualifying_days_between(r.start_date, r.effective_end, qualifying),
        )
        for r in records
    ]


def build_piws(records: Iterable[SicknessRecord], qualifying: QualifyingPattern) -> list[SicknessSpan]:
    """Spans with at least four qualifying days, sorted by start date."""
    piws = [s for s in build_spans(records, qualifying) if s.qualifying_days >= PIW_MIN_QUALIFYING_DAYS]
    piws.sort(key=lambda s: s.start)
    return piws


def link_piws(piws: Iterable[SicknessSpan]) -> list[Chain]:
    """Group sorted PIWs into chains; a gap of up to 56 calendar days links."""
    chains: list[Chain] = []
    current: list[SicknessSpan] = []

    for span in piws:
        if current and days_between(current[-1].end, span.start) > PIW_LINKING_GAP_DAYS:
            chains.append(Chain(spans=tuple(current)))
            current = []
        current.append(span)

    if current:
        chains.append(Chain(spans=tuple(current)))
    return chains


def build_chains(records: Iterable[SicknessRecord], qualifying: QualifyingPattern) -> list[Chain]:
    return link_piws(build_piws(records, qualifying))
