"""
api/index.py
Module-level app for serverless / gunicorn hosts:

    gunicorn api.index:app --worker-class aiohttp.GunicornWebWorker
"""

from api.webhook import create_app
from core.bot import create_bot, create_dispatcher
from utils.logger import setup_logging

setup_logging()

bot = create_bot()
dp = create_dispatcher()

app = create_app(bot, dp)
