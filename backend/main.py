"""Entry point shim for the Policy Simplifier web app.

The FastAPI application lives in `backend.app.main`. To run it (from root dir):

    uvicorn backend.app.main:app --reload

The extraction and analysis logic can also be used directly from
`backend.services.extractor` and `backend.services.simplifier`.
"""

from backend.app.main import app  # re-export the FastAPI app for uvicorn

__all__ = ["app"]
