import asyncio
import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse
from fastapi.middleware.cors import CORSMiddleware

from config import API_TITLE, ALLOWED_ORIGINS, DATABASE_URL, MAX_WORKERS, STATIC_DIR
from error_handlers import register_error_handlers
from middleware_logging import register_request_logging
from routers.generation import router as generation_router
from services import JobStore, MockVideoGenerator
from tasks import JobRunner

# --------------------------------------------------------------------------
# --- Configuration & Setup ---
# --------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


def create_app(
    database_url: str = DATABASE_URL,
    generator: Optional[MockVideoGenerator] = None,
    max_workers: int = MAX_WORKERS,
) -> FastAPI:
    """Build the API. The job store and worker pool live as long as the app's lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = JobStore(database_url)
        runner = JobRunner(store, generator, max_workers=max_workers)
        app.state.store = store
        app.state.runner = runner
        logging.info(f"🚀 Job store ready, {max_workers} worker(s) started")
        try:
            yield
        finally:
            # waits for running renders; keep the event loop free meanwhile
            await asyncio.to_thread(runner.shutdown)
            store.close()
            logging.info("Worker pool stopped, job store discarded")

    app = FastAPI(
        title=API_TITLE,
        description="A demo backend that accepts a text prompt and returns a mock generated video URL.",
        lifespan=lifespan,
    )

    register_request_logging(app)
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --------------------------------------------------------------------------
    # --- API Endpoints ---
    # --------------------------------------------------------------------------

    @app.get("/")
    def read_root():
        return {"status": f"🚀 {API_TITLE} is running!"}

    @app.get("/health")
    def health_check(request: Request):
        return {
            "status": "ok",
            "jobs": request.app.state.store.count(),
            "workers": request.app.state.runner.max_workers,
        }

    @app.get("/ui")
    def demo_page():
        """Serves the single-page demo client."""
        return FileResponse(os.path.join(STATIC_DIR, "index.html"), media_type="text/html")

    app.include_router(generation_router)
    return app


app = create_app()
