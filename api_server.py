from __future__ import annotations  # FastAPI server for the interview proctor backend

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import auth, documents, routes, scoring, vision
from api.errors import install_error_handlers
from config.settings import settings
from observability import configure_root_logging


logger = logging.getLogger(__name__)

SERVICE_NAME = "ace-server"


def create_app() -> FastAPI:  # Assemble routers, CORS and error rendering
    app = FastAPI(title="AI Interview Proctor API")
    origins = settings.cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "service": SERVICE_NAME}

    app.include_router(auth.router)
    app.include_router(routes.router)
    app.include_router(documents.router)
    app.include_router(scoring.router)
    app.include_router(vision.router)
    return app


configure_root_logging()
app = create_app()


if __name__ == "__main__":
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Run the interview proctor API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=4000)
    args = parser.parse_args()
    logger.info("Server listening on http://%s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)
