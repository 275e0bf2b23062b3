import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from telegram import Update
from telegram.ext import Application

from backend.config import settings
from backend.storage.database import init_db
from backend.bot.handlers import build_bot_app
from backend.api.rounds import router as rounds_router
from backend.api.stats import router as stats_router
from backend.services import round_service

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

bot_app: Application | None = None


async def start_bot() -> Application | None:
    if not settings.telegram_bot_token:
        logger.warning("No TELEGRAM_BOT_TOKEN set, bot disabled")
        return None

    app = build_bot_app()
    await app.initialize()
    await app.start()
    if settings.bot_mode == "webhook":
        webhook_url = f"{settings.webhook_url}/webhook"
        await app.bot.set_webhook(url=webhook_url)
        logger.info(f"Bot started in webhook mode: {webhook_url}")
    else:
        await app.updater.start_polling()
        logger.info("Bot started in polling mode")
    return app


async def stop_bot(app: Application) -> None:
    if settings.bot_mode == "polling" and app.updater:
        await app.updater.stop()
    await app.stop()
    await app.shutdown()
    logger.info("Bot stopped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    global bot_app
    init_db()
    logger.info("Database initialized")
    bot_app = await start_bot()

    yield

    if bot_app:
        await stop_bot(bot_app)
        bot_app = None
    # Live trackers are in memory only; close their rounds so empty ones are dropped
    round_service.end_all_rounds()


app = FastAPI(title="Shot Tracker", lifespan=lifespan)

app.include_router(rounds_router)
app.include_router(stats_router)


@app.post("/webhook")
async def telegram_webhook(request: Request):
    if bot_app is None:
        return JSONResponse({"error": "Bot not configured"}, status_code=503)
    update = Update.de_json(await request.json(), bot_app.bot)
    await bot_app.process_update(update)
    return JSONResponse({"ok": True})


# Serve frontend static files last (catch-all), when a build is present
if Path("frontend").is_dir():
    app.mount("/", StaticFiles(directory="frontend", html=True), name="frontend")
