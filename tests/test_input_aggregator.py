import pytest

from spritewalk.core.direction import Direction
from spritewalk.core.errors import InvalidDirectionError
from spritewalk.core.input import DEFAULT_KEYMAP, InputAggregator, keymap_from_names, merge_keymaps


@pytest.fixture
def inputs():
    return InputAggregator()


# --- Held set bookkeeping ---

def test_press_appends_in_first_press_order(inputs):
    inputs.press("ArrowUp")
    inputs.press("ArrowLeft")
    assert inputs.held == ("ArrowUp", "ArrowLeft")

def test_repeat_press_does_not_reorder(inputs):
    inputs.press("ArrowLeft")
    inputs.press("ArrowUp")
    inputs.press("ArrowLeft")  # key repeat / duplicate keydown
    assert inputs.held == ("ArrowLeft", "ArrowUp")
    assert len(inputs) == 2

def test_release_of_absent_token_is_noop(inputs):
    inputs.press("KeyW")
    inputs.release("KeyD")
    assert inputs.held == ("KeyW",)

def test_handle_routes_press_and_release(inputs):
    inputs.handle(True, "KeyS")
    assert "KeyS" in inputs
    inputs.handle(False, "KeyS")
    assert "KeyS" not in inputs

def test_clear_drops_everything(inputs):
    inputs.press("KeyA")
    inputs.press("KeyW")
    inputs.clear()
    assert inputs.held == ()
    assert inputs.resolve_direction() is None


# --- Direction resolution ---

def test_empty_set_resolves_to_none(inputs):
    assert inputs.resolve_direction() is None

def test_most_recent_held_survivor_wins(inputs):
    inputs.press("ArrowUp")
    inputs.press("ArrowLeft")
    inputs.release("ArrowLeft")
    assert inputs.resolve_direction() == Direction.UP

def test_latest_press_wins_while_both_held(inputs):
    inputs.press("ArrowUp")
    inputs.press("ArrowLeft")
    assert inputs.resolve_direction() == Direction.LEFT

def test_repress_keeps_original_position(inputs):
    inputs.press("ArrowLeft")
    inputs.press("ArrowUp")
    inputs.press("ArrowLeft")
    assert inputs.resolve_direction() == Direction.UP

def test_unmapped_tokens_are_skipped(inputs):
    inputs.press("KeyD")
    inputs.press("ShiftLeft")
    inputs.press(1073742049)  # raw key code with no mapping
    assert inputs.resolve_direction() == Direction.RIGHT

def test_only_unmapped_tokens_resolves_to_none(inputs):
    inputs.press("Space")
    assert inputs.resolve_direction() is None

def test_wasd_and_arrows_share_directions(inputs):
    for token, direction in DEFAULT_KEYMAP.items():
        inputs.clear()
        inputs.press(token)
        assert inputs.resolve_direction() == direction

def test_explicit_keymap_overrides_own(inputs):
    inputs.press("KeyJ")
    assert inputs.resolve_direction() is None
    assert inputs.resolve_direction({"KeyJ": Direction.LEFT}) == Direction.LEFT

def test_custom_keymap_at_construction():
    inputs = InputAggregator({"KeyH": Direction.LEFT, "KeyL": Direction.RIGHT})
    inputs.press("KeyH")
    inputs.press("ArrowUp")  # not in this keymap
    assert inputs.resolve_direction() == Direction.LEFT


# --- Keymap helpers ---

def test_keymap_from_names_parses_direction_names():
    keymap = keymap_from_names({"KeyJ": "left", "KeyK": "DOWN"})
    assert keymap == {"KeyJ": Direction.LEFT, "KeyK": Direction.DOWN}

def test_keymap_from_names_rejects_unknown_direction():
    with pytest.raises(InvalidDirectionError):
        keymap_from_names({"KeyJ": "sideways"})

def test_merge_keymaps_later_wins():
    merged = merge_keymaps(DEFAULT_KEYMAP, {"KeyA": Direction.RIGHT})
    assert merged["KeyA"] == Direction.RIGHT
    assert merged["ArrowLeft"] == Direction.LEFT
