from backend.bot.keyboards import driver_keyboard, option_label, options_keyboard
from backend.constants import MISS_DIRECTIONS, PUTTING


def test_option_labels():
    assert option_label("long_left") == "Long Left"
    assert option_label("green") == "On Green"
    assert option_label("hole") == "In Hole"


def test_options_keyboard_rows_and_callback_data():
    markup = options_keyboard("miss_direction", MISS_DIRECTIONS[PUTTING], per_row=2)
    rows = markup.inline_keyboard
    assert [len(r) for r in rows] == [2, 2, 2]
    assert rows[0][0].callback_data == "miss_direction:short_low"
    assert rows[2][1].text == "Long High"


def test_driver_keyboard():
    (row,) = driver_keyboard().inline_keyboard
    assert [b.callback_data for b in row] == ["used_driver:yes", "used_driver:no"]
