"""
Row Matcher.

Pure predicates applying an Active Filter Set to rows. A row matches when it
satisfies every filter (AND across columns); an empty filter set matches all rows.

  is_any_of  -> no values selected, or the row's value is one of them
  is_none_of -> the row's value is not one of the selected values

Rows are plain mappings of column id to value. A column missing from a row
reads as None, and None is never a member of a value set.
"""

from typing import Any, Iterable, List, Mapping, Sequence
import logging

import pandas as pd

from review_grid.schemas.filters import ActiveFilter, FilterCondition

logger = logging.getLogger(__name__)


def matches_filter(row: Mapping[str, Any], active_filter: ActiveFilter) -> bool:
    value = row.get(active_filter.column_id)
    selected = active_filter.values
    is_member = value is not None and value in selected

    if active_filter.condition == FilterCondition.IS_NONE_OF:
        return not is_member
    return len(selected) == 0 or is_member


def matches(row: Mapping[str, Any], active_filters: Sequence[ActiveFilter]) -> bool:
    return all(matches_filter(row, f) for f in active_filters)


def filter_rows(
    rows: Iterable[Mapping[str, Any]], active_filters: Sequence[ActiveFilter]
) -> List[Mapping[str, Any]]:
    """Rows matching every filter, in their original order."""
    active_filters = tuple(active_filters)
    return [row for row in rows if matches(row, active_filters)]


def filter_mask(frame: pd.DataFrame, active_filters: Sequence[ActiveFilter]) -> pd.Series:
    """
    Boolean mask over a DataFrame with the same semantics as `matches`.
    A filter on a column the frame does not have sees every value as missing.
    """
    mask = pd.Series(True, index=frame.index)

    for active in active_filters:
        if active.column_id in frame.columns:
            is_member = frame[active.column_id].isin(list(active.values))
        else:
            logger.debug(f"column '{active.column_id}' not in frame, treating as empty")
            is_member = pd.Series(False, index=frame.index)

        if active.condition == FilterCondition.IS_NONE_OF:
            mask &= ~is_member
        elif active.values:
            mask &= is_member

    return mask


def filter_frame(frame: pd.DataFrame, active_filters: Sequence[ActiveFilter]) -> pd.DataFrame:
    if frame.empty or not active_filters:
        return frame
    return frame[filter_mask(frame, active_filters)]
