# ─── Filter Chip Labels ────────────────────────────────────────────────────
CONDITION_LABELS = {
    "is_any_of": "is any of",
    "is_none_of": "is none of",
}
ALL_VALUES_LABEL = "All values"
SELECTED_COUNT_LABEL = "{count} selected"

# ─── Empty Search States ───────────────────────────────────────────────────
NO_COLUMNS_FOUND = "No columns found"
NO_VALUES_FOUND = "No values found"
