import pytest

from inkmark.config import ColorPreset, InkmarkSettings
from inkmark.controllers import (
    ColorOptionType,
    ColorSelectionState,
    ColorSelector,
    normalize_color,
)


@pytest.fixture
def selector():
    return ColorSelector()


def _choose_index(selector):
    return len(selector.options) - 1


def test_default_options_end_with_choose_entry(selector):
    values = [o.value for o in selector.options[:-1]]
    assert values == ["underline", "yellow", "orange", "red", "magenta", "aqua", "lime"]
    assert selector.options[-1].option_type == ColorOptionType.CHOOSE


def test_selecting_preset_emits_color(selector, recorder):
    changed = recorder()
    selector.color_changed.connect(changed)

    selector.select(2)

    assert changed.calls == [("orange",)]
    assert selector.state == ColorSelectionState.PRESET_SELECTED


def test_choose_entry_starts_custom_choice(selector, recorder):
    requested = recorder()
    selector.custom_color_requested.connect(requested)

    selector.select(_choose_index(selector))

    assert selector.state == ColorSelectionState.CHOOSING_CUSTOM
    assert requested.count == 1


def test_confirm_inserts_custom_slot_before_choose(selector, recorder):
    changed = recorder()
    selector.color_changed.connect(changed)
    selector.select(_choose_index(selector))

    value = selector.confirm_custom("#12AB34")

    assert value == "#12ab34"
    assert selector.options[-2].option_type == ColorOptionType.CUSTOM
    assert selector.options[-2].value == "#12ab34"
    assert selector.selected == len(selector.options) - 2
    assert selector.state == ColorSelectionState.PRESET_SELECTED
    assert changed.calls == [("#12ab34",)]


def test_same_custom_color_twice_keeps_one_slot(selector):
    for _ in range(2):
        selector.select(_choose_index(selector))
        selector.confirm_custom("#123456")

    assert len(selector.custom_options()) == 1


def test_different_custom_color_reuses_slot(selector):
    selector.select(_choose_index(selector))
    selector.confirm_custom("#123456")
    selector.select(_choose_index(selector))
    selector.confirm_custom("#654321")

    customs = selector.custom_options()
    assert len(customs) == 1
    assert customs[0].value == "#654321"


def test_cancel_restores_previous_selection(selector):
    selector.select(3)
    option_count = len(selector.options)
    selector.select(_choose_index(selector))

    assert selector.cancel_custom() == 3
    assert selector.selected_option.value == "red"
    assert len(selector.options) == option_count
    assert selector.state == ColorSelectionState.PRESET_SELECTED


def test_invalid_custom_color_keeps_choosing(selector):
    selector.select(_choose_index(selector))
    with pytest.raises(ValueError):
        selector.confirm_custom("not a color")
    assert selector.state == ColorSelectionState.CHOOSING_CUSTOM


def test_confirm_without_choosing(selector):
    with pytest.raises(RuntimeError):
        selector.confirm_custom("#ffffff")


def test_select_color_matches_preset(selector):
    assert selector.select_color("aqua") == 5
    assert selector.custom_options() == []


def test_select_empty_color_clears_selection(selector):
    selector.select(1)
    assert selector.select_color("") == -1
    assert selector.selected is None


def test_presets_come_from_settings():
    settings = InkmarkSettings(preset_colors=[ColorPreset("Blue", "blue")],
                               choose_color_label="Pick…")
    selector = ColorSelector(settings)

    assert [o.label for o in selector.options] == ["Blue", "Pick…"]


def test_normalize_color():
    assert normalize_color("red") == "#ff0000"
    with pytest.raises(ValueError):
        normalize_color("nope")
