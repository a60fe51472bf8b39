import time
from app.client.state import CREATE, CreateMode, EditingMode, editing_id, start_editing, stop_editing
from app.client.view import MessageRegion, StudentTable
from app.models.student import Student


def student(**overrides):
    data = {
        "id": 1,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@stanford.edu",
        "student_id": "S1001",
        "major": "Mathematics",
        "year": 2,
    }
    data.update(overrides)
    return Student(**data)


def test_editing_state_transitions():
    state = start_editing(7)
    assert state == EditingMode(student_id=7)
    assert editing_id(state) == 7

    state = stop_editing()
    assert isinstance(state, CreateMode)
    assert editing_id(state) is None
    assert state == CREATE


def test_render_keeps_unchanged_rows():
    table = StudentTable()
    first = table.render([student(id=1), student(id=2)])

    second = table.render([student(id=1), student(id=2, year=3), student(id=5)])

    assert second[0] is first[0]
    assert second[1] is not first[1]
    assert second[1].year == 3
    assert [r.id for r in second] == [1, 2, 5]


def test_render_drops_missing_rows():
    table = StudentTable()
    table.render([student(id=1), student(id=2)])

    table.render([student(id=2)])

    assert table.row(1) is None
    assert [r.id for r in table.rows] == [2]


def test_render_keeps_duplicate_ids():
    table = StudentTable()

    rows = table.render([student(id=1), student(id=1, first_name="Grace"), student(id=2)])

    assert [r.id for r in rows] == [1, 1, 2]
    assert [r.name for r in rows][:2] == ["Ada Lovelace", "Grace Lovelace"]
    assert table.row(1).name == "Ada Lovelace"


def test_new_message_replaces_pending_clear(clock):
    region = MessageRegion(5.0, clock)

    region.show("Student added successfully!", "success")
    clock.advance(3)
    region.show("Error deleting student", "error")

    clock.advance(3)
    assert region.current.text == "Error deleting student"

    clock.advance(2)
    assert region.current is None


def test_message_expires_with_real_clock():
    region = MessageRegion(0.01)

    region.show("Student deleted successfully!", "success")
    assert region.current.kind == "success"

    time.sleep(0.05)
    assert region.current is None
