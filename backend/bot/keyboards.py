from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from backend.constants import GREEN, HOLE

SPECIAL_LABELS = {GREEN: "On Green", HOLE: "In Hole"}


def option_label(value: str) -> str:
    """'long_left' -> 'Long Left'."""
    if value in SPECIAL_LABELS:
        return SPECIAL_LABELS[value]
    return " ".join(w.capitalize() for w in value.split("_"))


def options_keyboard(field: str, options: list[str], per_row: int = 3) -> InlineKeyboardMarkup:
    """Build inline keyboard for one capture field."""
    buttons = []
    row: list[InlineKeyboardButton] = []
    for value in options:
        row.append(InlineKeyboardButton(option_label(value), callback_data=f"{field}:{value}"))
        if len(row) == per_row:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)

    return InlineKeyboardMarkup(buttons)


def driver_keyboard() -> InlineKeyboardMarkup:
    """Build inline keyboard for the driver question on a tee shot."""
    return InlineKeyboardMarkup([
        [
            InlineKeyboardButton("Driver", callback_data="used_driver:yes"),
            InlineKeyboardButton("Other Club", callback_data="used_driver:no"),
        ]
    ])
