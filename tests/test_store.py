import pytest

from models import ClassificationResult, Row
from rows import RowStore

LOVE = ClassificationResult(category="Love", confidence=92, response="Thanks!", action="DM/Comment")


def assert_unclassified(row: Row) -> None:
    assert row.message == ""
    assert row.category == ""
    assert row.confidence is None
    assert row.response == ""
    assert row.action == ""


def test_starts_with_four_empty_rows(store):
    assert len(store) == 4
    for row in store.rows:
        assert_unclassified(row)


def test_initial_row_count_is_configurable():
    assert len(RowStore(initial_rows=0)) == 0
    with pytest.raises(ValueError):
        RowStore(initial_rows=-1)


def test_append_adds_one_unclassified_row(store):
    before = [row.id for row in store.rows]

    row = store.append()

    assert len(store) == 5
    assert store.rows[-1] == row
    assert [r.id for r in store.rows[:-1]] == before
    assert_unclassified(row)


def test_rows_returns_a_copy(store):
    store.rows.append(Row())

    assert len(store) == 4


def test_replace_at(store):
    replacement = Row(message="hello")

    store.replace_at(2, replacement)

    assert store.rows[2] == replacement
    assert len(store) == 4


@pytest.mark.parametrize("index", [-1, 4, 10])
def test_replace_at_out_of_range(store, index):
    with pytest.raises(IndexError):
        store.replace_at(index, Row())


def test_reset_all_keeps_count_and_empties_rows(store):
    row_id = store.rows[0].id
    row = store.edit_message(row_id, "I love your protein bars!")
    store.apply_result(row_id, row.revision, LOVE)
    store.append()
    old_ids = {r.id for r in store.rows}

    store.reset_all()

    assert len(store) == 5
    for row in store.rows:
        assert_unclassified(row)
    assert old_ids.isdisjoint(r.id for r in store.rows)


def test_edit_message_clears_classification(store):
    row_id = store.rows[1].id
    row = store.edit_message(row_id, "first")
    store.apply_result(row_id, row.revision, LOVE)

    edited = store.edit_message(row_id, "second")

    assert edited.message == "second"
    assert edited.category == ""
    assert edited.revision == row.revision + 1
    assert store.get(row_id) == edited


def test_edit_message_unknown_row(store):
    with pytest.raises(KeyError):
        store.edit_message("missing", "hello")


def test_apply_result_writes_to_row_by_id(store):
    row_id = store.rows[3].id
    row = store.edit_message(row_id, "I love your protein bars!")
    store.append()

    updated = store.apply_result(row_id, row.revision, LOVE)

    assert updated is not None
    assert store.index_of(row_id) == 3
    assert store.rows[3].category == "Love"
    assert store.rows[3].message == "I love your protein bars!"


def test_apply_result_discards_result_for_reset_row(store):
    row_id = store.rows[0].id
    row = store.edit_message(row_id, "hello")
    store.reset_all()

    assert store.apply_result(row_id, row.revision, LOVE) is None
    for row in store.rows:
        assert_unclassified(row)


def test_apply_result_discards_superseded_edit(store):
    row_id = store.rows[0].id
    first = store.edit_message(row_id, "first")
    store.edit_message(row_id, "second")

    assert store.apply_result(row_id, first.revision, LOVE) is None
    assert store.get(row_id).category == ""


def test_get_and_index_of_unknown_row(store):
    assert store.get("missing") is None
    assert store.index_of("missing") is None
