import pytest
from pydantic import ValidationError

from review_grid.schemas.columns import ColumnType, FilterableColumn
from review_grid.schemas.filters import ActiveFilter, FilterCondition
from review_grid.services.filter_engine.service import (
    FilterEngine,
    condition_label,
    describe_values,
)


@pytest.fixture
def changes(recorder):
    return recorder()


@pytest.fixture
def touched(recorder):
    return recorder()


@pytest.fixture
def engine(columns, changes, touched):
    return FilterEngine(columns, on_filters_change=changes, on_column_filter=touched)


class TestToggleValue:
    def test_first_toggle_creates_any_of_filter(self, engine, changes, touched):
        engine.toggle_value("status", "open")

        assert engine.filters == (
            ActiveFilter(
                column_id="status",
                column_header="Status",
                column_type=ColumnType.SELECTION,
                condition=FilterCondition.IS_ANY_OF,
                values=("open",),
            ),
        )
        assert changes.last == engine.filters
        assert touched.calls == ["status"]

    def test_toggle_adds_in_selection_order(self, engine):
        engine.toggle_value("owner", "carol")
        engine.toggle_value("owner", "alice")
        assert engine.get_filter("owner").values == ("carol", "alice")

    def test_double_toggle_restores_values(self, engine):
        engine.toggle_value("owner", "alice")
        before = engine.get_filter("owner").values

        engine.toggle_value("owner", "bob")
        engine.toggle_value("owner", "bob")

        assert engine.get_filter("owner").values == before

    def test_double_toggle_on_fresh_column_leaves_empty_filter(self, engine):
        engine.toggle_value("status", "open")
        engine.toggle_value("status", "open")
        assert engine.get_filter("status").values == ()
        assert engine.has_filters

    def test_pending_cache_tracks_active_values(self, engine):
        engine.toggle_value("owner", "alice")
        engine.toggle_value("owner", "bob")
        assert engine.pending.get("owner") == ("alice", "bob")
        assert engine.selected_values("owner") == ("alice", "bob")

    def test_unknown_column_is_noop(self, engine, changes, touched):
        engine.toggle_value("status", "open")
        before = engine.snapshot()

        engine.toggle_value("nope", "open")

        assert engine.snapshot() == before
        assert len(changes.calls) == 1
        assert touched.calls == ["status"]

    def test_value_outside_domain_is_noop(self, engine, changes):
        engine.toggle_value("status", "archived")
        assert engine.filters == ()
        assert changes.calls == []

    def test_filters_keep_creation_order(self, engine):
        engine.toggle_value("owner", "alice")
        engine.toggle_value("status", "open")
        engine.set_condition("owner", "is_none_of")
        engine.toggle_value("owner", "bob")
        assert [f.column_id for f in engine.filters] == ["owner", "status"]


class TestSetCondition:
    def test_updates_existing_filter(self, engine, changes):
        engine.toggle_value("status", "open")
        engine.set_condition("status", FilterCondition.IS_NONE_OF)

        assert engine.get_filter("status").condition == FilterCondition.IS_NONE_OF
        assert engine.get_filter("status").values == ("open",)
        assert len(changes.calls) == 2

    def test_accepts_plain_string(self, engine):
        engine.toggle_value("status", "open")
        engine.set_condition("status", "is_none_of")
        assert engine.get_filter("status").condition == FilterCondition.IS_NONE_OF

    def test_without_filter_is_noop(self, engine, changes):
        engine.set_condition("status", "is_none_of")
        assert engine.filters == ()
        assert changes.calls == []

    def test_unknown_condition_is_noop(self, engine, changes):
        engine.toggle_value("status", "open")
        before = engine.snapshot()

        engine.set_condition("status", "is_between")

        assert engine.snapshot() == before
        assert len(changes.calls) == 1


class TestRemoveFilter:
    def test_remove_only_filter_emits_empty_set(self, engine, changes, touched):
        engine.toggle_value("status", "open")
        engine.remove_filter("status")

        assert engine.filters == ()
        assert changes.last == ()
        assert touched.last == "status"
        assert "status" not in engine.pending

    def test_remove_absent_is_noop(self, engine, changes):
        engine.toggle_value("owner", "bob")
        before = engine.snapshot()

        engine.remove_filter("status")
        engine.remove_filter("status")

        assert engine.snapshot() == before
        assert len(changes.calls) == 1

    def test_selection_starts_fresh_after_remove(self, engine):
        engine.toggle_value("owner", "bob")
        engine.remove_filter("owner")
        assert engine.selected_values("owner") == ()
        engine.toggle_value("owner", "alice")
        assert engine.get_filter("owner").values == ("alice",)


class TestChangeColumn:
    def test_retargets_and_clears_values(self, engine, touched):
        engine.toggle_value("status", "open")
        engine.toggle_value("status", "closed")
        engine.set_condition("status", "is_none_of")

        engine.change_column("status", "owner")

        moved = engine.get_filter("owner")
        assert moved.values == ()
        assert moved.column_header == "Owner"
        assert moved.column_type == ColumnType.TEXT
        assert moved.condition == FilterCondition.IS_NONE_OF
        assert engine.get_filter("status") is None
        assert "status" not in engine.pending
        assert engine.pending.get("owner") == ()
        assert touched.last == "owner"

    def test_keeps_position(self, engine):
        engine.toggle_value("status", "open")
        engine.toggle_value("owner", "bob")
        engine.change_column("status", "file")
        assert [f.column_id for f in engine.filters] == ["file", "owner"]

    def test_reports_vacated_and_new_column(self, engine, touched):
        engine.toggle_value("status", "open")
        engine.change_column("status", "owner")
        assert touched.calls == ["status", "status", "owner"]

    def test_same_column_reported_once(self, engine, touched):
        engine.toggle_value("status", "open")
        engine.change_column("status", "status")
        assert touched.calls == ["status", "status"]

    def test_same_column_resets_values(self, engine):
        engine.toggle_value("status", "open")
        engine.change_column("status", "status")
        assert engine.get_filter("status").values == ()

    def test_unknown_target_is_noop(self, engine, changes):
        engine.toggle_value("status", "open")
        before = engine.snapshot()

        engine.change_column("status", "missing")

        assert engine.snapshot() == before
        assert len(changes.calls) == 1

    def test_missing_source_filter_is_noop(self, engine, changes):
        engine.change_column("status", "owner")
        assert engine.filters == ()
        assert changes.calls == []

    def test_target_with_existing_filter_is_noop(self, engine):
        engine.toggle_value("status", "open")
        engine.toggle_value("owner", "bob")
        before = engine.snapshot()

        engine.change_column("status", "owner")

        assert engine.snapshot() == before
        assert len({f.column_id for f in engine.filters}) == len(engine.filters)


class TestRegistryChanges:
    def test_clear_filters(self, engine, changes):
        engine.toggle_value("status", "open")
        engine.toggle_value("owner", "bob")

        engine.clear_filters()
        engine.clear_filters()

        assert engine.filters == ()
        assert engine.pending.snapshot() == {}
        assert changes.calls[-1] == ()
        assert len(changes.calls) == 3

    def test_filters_keep_header_copy_until_columns_replaced(self, engine, columns):
        engine.toggle_value("status", "open")

        renamed = [c.model_copy(update={"header": "State"}) if c.id == "status" else c for c in columns]
        assert engine.get_filter("status").column_header == "Status"

        engine.set_columns(renamed)
        assert engine.get_filter("status").column_header == "State"

    def test_set_columns_drops_vanished_filters(self, engine, columns, changes):
        engine.toggle_value("status", "open")
        engine.toggle_value("owner", "bob")

        engine.set_columns([c for c in columns if c.id != "status"])

        assert [f.column_id for f in engine.filters] == ["owner"]
        assert "status" not in engine.pending
        assert changes.last == engine.filters

    def test_set_columns_unchanged_is_silent(self, engine, columns, changes):
        engine.toggle_value("owner", "bob")
        engine.set_columns(columns)
        assert len(changes.calls) == 1

    def test_set_columns_clips_values_to_new_domain(self, engine, columns, changes):
        engine.toggle_value("status", "open")
        engine.toggle_value("status", "closed")

        shrunk = [
            c.model_copy(update={"values": ("closed",)}) if c.id == "status" else c
            for c in columns
        ]
        engine.set_columns(shrunk)

        assert engine.get_filter("status").values == ("closed",)
        assert engine.pending.get("status") == ("closed",)
        assert changes.last == engine.filters

        engine.toggle_value("status", "closed")
        assert engine.get_filter("status").values == ()
        engine.toggle_value("status", "open")
        assert engine.get_filter("status").values == ()


def test_duplicate_column_ids_rejected(columns):
    with pytest.raises(ValueError):
        FilterEngine(columns + [columns[0]])


def test_invalid_column_type_rejected():
    with pytest.raises(ValidationError):
        FilterableColumn(id="x", header="X", type="number")


def test_snapshots_are_immutable(engine):
    engine.toggle_value("status", "open")
    with pytest.raises(ValidationError):
        engine.filters[0].values = ("closed",)


def test_engine_without_callbacks(columns):
    engine = FilterEngine(columns)
    engine.toggle_value("status", "open")
    engine.remove_filter("status")
    assert not engine.has_filters


@pytest.mark.parametrize(
    "values, expected",
    [((), "All values"), (("open",), "open"), (("open", "closed"), "2 selected")],
)
def test_describe_values(values, expected):
    active = ActiveFilter(
        column_id="status", column_header="Status", column_type="selection", values=values
    )
    assert describe_values(active) == expected


def test_condition_label():
    assert condition_label("is_any_of") == "is any of"
    assert condition_label(FilterCondition.IS_NONE_OF) == "is none of"
