import logging

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    ConversationHandler,
    MessageHandler,
    filters,
)

from backend.config import settings
from backend.constants import YARDS
from backend.bot.keyboards import driver_keyboard, option_label, options_keyboard
from backend.services import round_service
from backend.services.scorecard import score_to_par_label
from backend.services.tracker import RoundTracker
from backend.services.units import parse_distance
from backend.services.validation import (
    DISTANCE_INPUT,
    MISS_DIRECTION,
    PUTT_BREAK,
    PUTT_SLOPE,
    RESULT_OF_SHOT,
    USED_DRIVER,
    field_options,
)

logger = logging.getLogger(__name__)

# Conversation states
CAPTURE = 0

# User data keys
ROUND_ID = "round_id"

FIELD_PROMPTS = {
    USED_DRIVER: "Driver off the tee?",
    PUTT_BREAK: "How did the putt break?",
    PUTT_SLOPE: "What was the slope?",
    RESULT_OF_SHOT: "Where did it finish?",
    MISS_DIRECTION: "Which way did it miss?",
}


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show help message."""
    await update.message.reply_text(
        "Shot Tracker\n\n"
        "/round - Start a new round\n"
        "/cancel - End current round early (finished holes are saved)\n"
        "/help - Show this message\n\n"
        "For every shot:\n"
        "1. Type the distance left to the hole (0 if holed)\n"
        "2. Tap the buttons for whatever else is asked\n"
        "3. The shot is logged as soon as nothing is missing"
    )


def _unit_label(unit: str) -> str:
    return "yds" if unit == YARDS else "ft"


def _shot_header(tracker: RoundTracker) -> str:
    hole = tracker.hole
    tracking = tracker.state.tracking
    return (
        f"Hole {hole.number} (Par {hole.par}, {hole.yardage} yds) - "
        f"Shot {tracking.current_shot_number} ({option_label(tracker.shot_type)})\n"
        f"{tracking.distance_to_hole} {_unit_label(tracking.distance_unit)} to the hole"
    )


def _distance_prompt(tracker: RoundTracker) -> str:
    unit = _unit_label(tracker.state.tracking.distance_unit)
    return f"Distance to the hole after this shot ({unit}, 0 if holed):"


def _get_tracker(context: ContextTypes.DEFAULT_TYPE) -> RoundTracker | None:
    round_id = context.user_data.get(ROUND_ID)
    return round_service.get_tracker(round_id) if round_id else None


async def start_round(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Start a new round via /round command."""
    user_id = str(update.effective_user.id)
    round_id, tracker = round_service.start_round(user_id=user_id)
    context.user_data[ROUND_ID] = round_id

    await update.message.reply_text(
        "Starting 18-hole round!\n\n"
        f"{_shot_header(tracker)}\n\n{_distance_prompt(tracker)}"
    )
    return CAPTURE


async def distance_entered(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle a typed distance for the shot in progress."""
    tracker = _get_tracker(context)
    if tracker is None:
        await update.message.reply_text("No round in progress. Use /round to start one.")
        return ConversationHandler.END

    text = update.message.text
    if parse_distance(text) is None:
        await update.message.reply_text("Please send the distance as a number.")
        return CAPTURE

    tracker.update_capture(distance_input=text)
    return await _advance(update.message.reply_text, tracker, context)


async def field_selected(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle a button tap for driver, result, miss direction, break or slope."""
    query = update.callback_query
    await query.answer()

    tracker = _get_tracker(context)
    if tracker is None:
        await query.edit_message_text("No round in progress. Use /round to start one.")
        return ConversationHandler.END

    field, value = query.data.split(":", 1)
    if field == USED_DRIVER:
        value = value == "yes"
    tracker.update_capture(**{field: value})
    return await _advance(query.edit_message_text, tracker, context)


async def _advance(reply, tracker: RoundTracker, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Ask for the next missing field, or log the shot once none are missing."""
    missing = tracker.missing_fields
    if missing:
        field = missing[0]
        if field == DISTANCE_INPUT:
            await reply(f"{_shot_header(tracker)}\n\n{_distance_prompt(tracker)}")
        elif field == USED_DRIVER:
            await reply(f"{_shot_header(tracker)}\n\n{FIELD_PROMPTS[field]}", reply_markup=driver_keyboard())
        else:
            keyboard = options_keyboard(field, field_options(field, tracker.shot_type))
            await reply(f"{_shot_header(tracker)}\n\n{FIELD_PROMPTS[field]}", reply_markup=keyboard)
        return CAPTURE

    transition = tracker.submit()
    record = transition.record
    text = (
        f"Shot {record.shot_number} ({option_label(record.shot_type)}): "
        f"{record.shot_distance} {_unit_label(record.distance_unit)}, "
        f"{option_label(record.result_of_shot)}"
    )

    if transition.completed is not None:
        hole = transition.completed.hole
        totals = tracker.scorecard().totals
        text += (
            f"\n\nHole {hole.number} done: {hole.score} ({score_to_par_label(hole.score - hole.par)}). "
            f"Total {totals.total_score} ({score_to_par_label(totals.score_to_par)}) "
            f"through {totals.holes_completed}."
        )
        if tracker.is_finished:
            round_service.end_round(context.user_data[ROUND_ID])
            context.user_data.clear()
            await reply(text + "\n\nRound complete! View your dashboard to see updated stats.")
            return ConversationHandler.END

    await reply(f"{text}\n\n{_shot_header(tracker)}\n\n{_distance_prompt(tracker)}")
    return CAPTURE


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """End the current round early. Completed holes are kept."""
    round_id = context.user_data.get(ROUND_ID)

    if round_id:
        holes_saved = round_service.end_round(round_id)
        if holes_saved:
            await update.message.reply_text(
                f"Round ended early. {holes_saved} holes saved.\n\n"
                f"View your dashboard to see updated stats."
            )
        else:
            await update.message.reply_text("Round cancelled. No data saved.")
    else:
        await update.message.reply_text("No round in progress.")

    context.user_data.clear()
    return ConversationHandler.END


def build_bot_app() -> Application:
    """Build and return the telegram bot Application."""
    app = Application.builder().token(settings.telegram_bot_token).build()

    fields = "|".join([USED_DRIVER, RESULT_OF_SHOT, MISS_DIRECTION, PUTT_BREAK, PUTT_SLOPE])
    conv_handler = ConversationHandler(
        entry_points=[CommandHandler("round", start_round)],
        states={
            CAPTURE: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, distance_entered),
                CallbackQueryHandler(field_selected, pattern=rf"^({fields}):"),
            ],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )

    app.add_handler(conv_handler)
    app.add_handler(CommandHandler("help", help_command))

    return app
