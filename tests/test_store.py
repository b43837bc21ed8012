from datetime import datetime, timedelta, timezone

import pytest

from todolist.models import Status, TodoItem
from todolist.store import (
    CSVData,
    DataHandler,
    StoreError,
    UnsupportedFormatError,
    decode_records,
    encode_records,
    new_store,
)

UTC = timezone.utc


def make_item(**overrides):
    fields = dict(id=1, task="buy milk", created_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC))
    fields.update(overrides)
    return TodoItem(**fields)


def full_item():
    return make_item(
        id=4,
        parent_id=3,
        task="write, then review",
        due=datetime(2025, 2, 1, 12, 0, 0, tzinfo=UTC),
        done_at=datetime(2025, 1, 20, 8, 30, 0, tzinfo=timezone(timedelta(hours=-5))),
        status=Status.DONE,
    )


def test_encode_pins_record_layout():
    zero = "0001-01-01T00:00:00Z"
    assert encode_records([make_item()]) == [
        ["1", "0", "[]", "buy milk", "2025-01-02T03:04:05Z", zero, zero, "0"]
    ]


def test_encode_keeps_offset():
    tz = timezone(timedelta(hours=5, minutes=30))
    [record] = encode_records([make_item(created_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=tz))])
    assert record[4] == "2025-01-02T03:04:05+05:30"


@pytest.mark.parametrize(
    "item",
    [make_item(), full_item(), make_item(children_ids=[5, 6], status=Status.IN_PROGRESS)],
)
def test_encode_decode_round_trip(item):
    assert decode_records(encode_records([item])) == [item]


def test_unset_times_decode_to_none():
    [item] = decode_records(encode_records([make_item(created_at=None)]))
    assert item.created_at is None
    assert item.due is None
    assert item.done_at is None


def test_naive_time_is_stored_as_local_time():
    naive = datetime(2025, 6, 1, 10, 0, 0)
    [item] = decode_records(encode_records([make_item(created_at=naive)]))
    assert item.created_at == naive.astimezone()
    assert item.created_at.utcoffset() is not None


def test_fractional_seconds_are_accepted():
    [record] = encode_records([make_item()])
    record[4] = record[4].replace("05Z", "05.250Z")
    [item] = decode_records([record])
    assert item.created_at.microsecond == 250000


def base_record():
    return encode_records([full_item()])[0]


@pytest.mark.parametrize(
    ("index", "value", "message"),
    [
        (0, "x", "id"),
        (1, "1.5", "parent id"),
        (4, "yesterday", "created"),
        (5, "2025-13-01T00:00:00Z", "due"),
        (6, "2025-01-01", "done"),
        (7, "abc", "status"),
        (7, "9", "status"),
        (2, "1,2", "children"),
    ],
)
def test_decode_rejects_bad_fields(index, value, message):
    record = base_record()
    record[index] = value
    with pytest.raises(StoreError, match=message):
        decode_records([record])


def test_decode_rejects_short_record():
    with pytest.raises(StoreError, match="incorrect record length"):
        decode_records([base_record()[:7]])


def test_load_missing_file_creates_it(tmp_path):
    path = tmp_path / "todo.csv"
    assert CSVData(path).load() == []
    assert path.exists()


def test_save_then_load_round_trip(tmp_path):
    store = CSVData(tmp_path / "todo.csv")
    items = [make_item(), full_item()]
    store.save(items)
    assert store.load() == items


def test_saved_file_holds_one_line_per_record(tmp_path):
    path = tmp_path / "todo.csv"
    item = make_item()
    CSVData(path).save([item])
    assert path.read_text(encoding="utf-8") == ",".join(encode_records([item])[0]) + "\n"


def test_save_replaces_previous_content(tmp_path):
    store = CSVData(tmp_path / "todo.csv")
    store.save([make_item(), full_item()])
    store.save([full_item()])
    assert store.load() == [full_item()]


def test_load_skips_blank_lines(tmp_path):
    path = tmp_path / "todo.csv"
    line = ",".join(encode_records([make_item()])[0])
    path.write_text(line + "\n\n" + line + "\n", encoding="utf-8")
    assert CSVData(path).load() == [make_item(), make_item()]


def test_load_rejects_uneven_records(tmp_path):
    path = tmp_path / "todo.csv"
    line = ",".join(encode_records([make_item()])[0])
    path.write_text(line + "\n" + line + ",extra\n", encoding="utf-8")
    with pytest.raises(StoreError, match="wrong number of fields"):
        CSVData(path).load()


def test_load_reports_decoding_errors(tmp_path):
    path = tmp_path / "todo.csv"
    path.write_text("a,b,c,d,e,f,g,h\n", encoding="utf-8")
    with pytest.raises(StoreError, match="error decoding CSV"):
        CSVData(path).load()


def test_new_store_picks_csv(tmp_path):
    path = tmp_path / "list.csv"
    store = new_store(path)
    store.save([make_item()])
    assert CSVData(path).load() == [make_item()]


@pytest.mark.parametrize("name", ["todo.json", "todo.sqlite", "todo.txt", "todo"])
def test_new_store_rejects_other_formats(name):
    with pytest.raises(UnsupportedFormatError):
        new_store(name)


def test_unknown_format_names_extension():
    with pytest.raises(UnsupportedFormatError, match="unknown format, txt"):
        new_store("todo.txt")


def test_data_handler_is_abstract():
    with pytest.raises(TypeError):
        DataHandler()