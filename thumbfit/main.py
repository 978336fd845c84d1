from __future__ import annotations

import logging

from fastapi import FastAPI

from thumbfit.api.routes import CONFIG
from thumbfit.api.routes import router as api_router

logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Thumbnail Bounds Resolver")

app.include_router(api_router)
