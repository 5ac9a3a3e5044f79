"""FastAPI application entry point."""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from chatagent import __version__
from chatagent.routes import agent, chats, files

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Chat Agent",
    description="Retrieval-augmented chat and step-by-step agent runs over a hosted LLM",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(chats.router)
app.include_router(agent.router)
app.include_router(files.router)


@app.on_event("startup")
def startup_event():
    """Create database tables when the app starts."""
    from chatagent.database import init_db

    logger.info("Starting application...")
    init_db()


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Serve static files (frontend)
static_dir = os.path.join(os.path.dirname(__file__), "static")
if os.path.exists(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/")
    def serve_frontend():
        """Serve frontend HTML."""
        return FileResponse(os.path.join(static_dir, "index.html"))
else:
    @app.get("/")
    def root():
        """Root endpoint when no frontend."""
        return {
            "name": "Chat Agent",
            "version": __version__,
            "status": "running",
        }


def main():
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "chatagent.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )


if __name__ == "__main__":
    main()
