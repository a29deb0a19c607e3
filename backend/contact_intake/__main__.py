"""Run the contact intake API with uvicorn: ``python -m contact_intake``."""
import os

import uvicorn

from .core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "contact_intake.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
        reload=not settings.is_production,
        log_level=settings.LOG_LEVEL.lower(),
    )
