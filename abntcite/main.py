"""FastAPI application entry point for AbntCite."""

from fastapi import FastAPI

from abntcite.routers import references

app = FastAPI(
    title="AbntCite",
    description="ABNT reference lists from BibTeX bibliographies",
    version="0.1.0",
)

app.include_router(references.router, prefix="/api", tags=["references"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


def run():
    """Run the application with uvicorn."""
    import uvicorn
    uvicorn.run("abntcite.main:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    run()
