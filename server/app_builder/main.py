import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app_builder.api.extract import handle_extraction_error, health_payload, router as extract_router
from app_builder.core.config import Settings
from app_builder.core.errors import ExtractionError
from app_builder.core.llm_client import CompletionClient


def create_app(settings: Optional[Settings] = None, client: Optional[CompletionClient] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="AI App Builder Backend")
    app.state.settings = settings
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ExtractionError, handle_extraction_error)
    app.include_router(extract_router, prefix="/api")

    @app.get("/health")
    async def health(request: Request):
        return health_payload(request.app)

    return app


app = create_app()


def run():
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)


if __name__ == "__main__":
    run()
