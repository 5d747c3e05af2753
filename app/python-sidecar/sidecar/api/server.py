"""
Workflow Console Backend - FastAPI Server

Serves the task-tree projections (timeline and tasks views) and the
sessions status filter to the console frontend. Data fetching from the
workflow server happens elsewhere; every request carries resolved payloads.
"""

import argparse
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workflow_console import __version__
from workflow_console.core.config import ConsoleSettings

from . import view_registry
from .routes import sessions, tasks, timeline


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Drop every live view (and its fold state) on shutdown."""
    yield
    view_registry.clear()


app = FastAPI(
    title="Workflow Console Backend",
    description="Task tree and session list projections for the workflow console",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:9000",
        "http://127.0.0.1:9000",
    ],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(timeline.router, prefix="/api/timeline", tags=["timeline"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "ok", "views": view_registry.count()}


@app.get("/")
def root():
    """Root endpoint with API info"""
    return {
        "name": "Workflow Console Backend",
        "version": __version__,
        "docs": "/docs",
    }


def main():
    """Main entry point for the sidecar"""
    parser = argparse.ArgumentParser(description="Workflow Console Backend Server")
    parser.add_argument(
        "--port",
        type=int,
        default=9876,
        help="Port to run the server on (default: 9876)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    args = parser.parse_args()

    settings = ConsoleSettings.from_env()
    view_registry.configure(settings)

    print(f"Starting workflow console backend on {args.host}:{args.port}")

    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["access"]["fmt"] = "%(asctime)s %(levelprefix)s %(client_addr)s - \"%(request_line)s\" %(status_code)s"
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s %(levelprefix)s %(message)s"
    log_config["formatters"]["access"]["datefmt"] = "%H:%M:%S"
    log_config["formatters"]["default"]["datefmt"] = "%H:%M:%S"

    # Views live in process memory, so a single worker keeps them reachable.
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level, workers=1, log_config=log_config)


if __name__ == "__main__":
    main()
