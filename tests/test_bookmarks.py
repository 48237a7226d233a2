import pytest

from inkmark.core.annotations import Bookmark, Location
from inkmark.core.position import PositionRange


def test_add_is_unique(bookmarks, recorder):
    added = recorder()
    bookmarks.bookmark_added.connect(added)

    first = bookmarks.add("p3", "One")
    again = bookmarks.add("p3", "Other")

    assert again is first
    assert len(bookmarks) == 1
    assert added.count == 1


def test_delete_and_has_items(bookmarks, recorder):
    has_items = recorder()
    bookmarks.has_items_changed.connect(has_items)

    bookmarks.add("p3", "One")
    assert bookmarks.delete("p3") is True
    assert bookmarks.delete("p3") is False

    assert has_items.calls == [(True,), (False,)]


def test_load_accepts_records_and_dicts(bookmarks):
    added = bookmarks.load([Bookmark("p1", "A"), {"value": "p2", "label": "B"}, {"identifier": "p1"}])

    assert added == 2
    assert bookmarks.identifiers() == ["p1", "p2"]


def test_go_to_bookmark(bookmarks, recorder):
    requested = recorder()
    bookmarks.navigation_requested.connect(requested)
    bookmarks.add("p3")

    assert bookmarks.go_to_bookmark("p3") is True
    assert bookmarks.go_to_bookmark("p4") is False
    assert requested.calls == [("p3",)]


def test_viewport_membership_is_boundary_inclusive(bookmarks, tracker):
    for identifier in ["p3", "p6", "p9", "p12"]:
        bookmarks.add(identifier)

    in_view = tracker.update_location(Location(PositionRange("p5", "p9"), 1, "One"))

    assert set(in_view) == {"p6", "p9"}


def test_viewport_handles_reversed_range(bookmarks, tracker):
    for identifier in ["p3", "p6", "p9", "p12"]:
        bookmarks.add(identifier)

    assert set(tracker.update_location(Location(PositionRange("p9", "p5")))) == {"p6", "p9"}


def test_point_location_matches_exact_bookmark(bookmarks, tracker):
    bookmarks.add("p6")
    bookmarks.add("p7")

    assert tracker.update_location(Location("p6")) == ["p6"]


def test_has_items_in_view_signal_on_transitions_only(bookmarks, tracker, recorder):
    flag = recorder()
    tracker.has_items_in_view_changed.connect(flag)
    bookmarks.add("p6")

    tracker.update_location(Location(PositionRange("p1", "p2")))
    tracker.update_location(Location(PositionRange("p5", "p7")))
    tracker.update_location(Location(PositionRange("p4", "p8")))
    tracker.update_location(Location(PositionRange("p20", "p30")))

    assert flag.calls == [(True,), (False,)]


def test_toggle_twice_leaves_no_bookmark(bookmarks, tracker):
    tracker.update_location(Location(PositionRange("p5", "p9"), 2, "Chapter 2"))

    tracker.toggle()
    assert bookmarks.identifiers() == ["p5"]
    assert bookmarks.get("p5").label == "Chapter 2"
    assert tracker.has_items_in_view

    tracker.toggle()
    assert bookmarks.identifiers() == []
    assert not tracker.has_items_in_view


def test_toggle_removes_every_bookmark_in_view(bookmarks, tracker):
    for identifier in ["p3", "p6", "p7", "p12"]:
        bookmarks.add(identifier)
    tracker.update_location(Location(PositionRange("p5", "p9")))

    tracker.toggle()

    assert bookmarks.identifiers() == ["p3", "p12"]


def test_toggle_uses_default_label(bookmarks, tracker):
    tracker.update_location(Location("p4"))
    tracker.toggle()
    assert bookmarks.get("p4").label == "Untitled"


def test_toggle_without_location(tracker):
    with pytest.raises(RuntimeError):
        tracker.toggle()


def test_deleting_bookmark_recomputes_view(bookmarks, tracker):
    bookmarks.add("p6")
    tracker.update_location(Location(PositionRange("p5", "p9")))
    assert tracker.has_items_in_view

    bookmarks.delete("p6")

    assert tracker.in_view == []
    assert not tracker.has_items_in_view


def test_reset_forgets_location(bookmarks, tracker):
    bookmarks.add("p6")
    tracker.update_location(Location("p6"))

    tracker.reset()

    assert tracker.location is None
    assert tracker.in_view == []
