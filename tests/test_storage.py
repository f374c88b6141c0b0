import pytest

from amic_invisible.storage import Assignment, CorruptRecordError, DataStore, LinkEntry, RecordFile


def test_record_file_creates_parent_directory(tmp_path):
    record = RecordFile(tmp_path / "nested" / "dir" / "record.json")
    assert not record.exists()
    assert record.read() is None

    assert record.create_if_absent([{"a": 1}])
    assert record.read() == [{"a": 1}]


def test_record_file_never_overwrites(tmp_path):
    record = RecordFile(tmp_path / "record.json")
    assert record.create_if_absent(["first"])
    before = record.path.read_bytes()

    assert not record.create_if_absent(["second"])
    assert record.path.read_bytes() == before


def test_record_file_leaves_no_temporary_files(tmp_path):
    record = RecordFile(tmp_path / "record.json")
    record.create_if_absent(["first"])
    record.create_if_absent(["second"])
    assert [path.name for path in tmp_path.iterdir()] == ["record.json"]


def test_data_store_round_trip_and_lookups(tmp_path):
    store = DataStore(str(tmp_path / "data"))
    links = [LinkEntry(id="id-1", person="tok-a"), LinkEntry(id="id-2", person="tok-b")]
    assignments = [Assignment("tok-a", "tok-b"), Assignment("tok-b", "tok-a")]

    assert store.load_links() is None
    assert store.find_link("id-1") is None

    assert store.save_links(links)
    assert store.save_assignments(assignments)

    assert store.load_links() == links
    assert store.find_link("id-2") == links[1]
    assert store.find_link("id-3") is None
    assert store.find_assignment("tok-b") == assignments[1]
    assert store.find_assignment("tok-c") is None


@pytest.mark.parametrize(
    "content",
    [b"{not json", b"\xff\xfe\x00garbage", b'{"id": "x"}', b'[{"giver": "a"}]', b"[42]"],
)
def test_damaged_records_raise_corrupt_record_error(tmp_path, content):
    store = DataStore(str(tmp_path))
    store.links.path.write_bytes(content)
    store.assignments.path.write_bytes(content)

    with pytest.raises(CorruptRecordError):
        store.load_links()
    with pytest.raises(CorruptRecordError):
        store.load_assignments()
