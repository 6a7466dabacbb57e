"""Run the Coaching Log FastAPI application with uvicorn."""

import uvicorn

from coaching_log.application.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "coaching_log.application.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
