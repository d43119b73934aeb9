from __future__ import annotations

import logging

from fastapi import FastAPI

from api.validate import get_validator, router

logger = logging.getLogger(__name__)


def create_app(*, validate_on_startup: bool = True) -> FastAPI:
    app = FastAPI(title="Bag validator")
    app.include_router(router)

    if validate_on_startup:
        # Builds the rule set and checks its configuration; raises if the rules are inconsistent.
        get_validator()
        logger.info("Validate router mounted")
    return app
