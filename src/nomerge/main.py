"""FastAPI application for the nomerge check."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from git.exc import GitCommandError

from .errors import ScanError
from .git_utils import cloned_repo
from .models import CheckRequest, CheckResult
from .runner import run_local_check

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="NoMerge",
    description="Blocks merges when forbidden marker text is found in files or a PR description",
    version="0.1.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def _check(request: CheckRequest, path) -> CheckResult:
    return run_local_check(
        path,
        request.patterns,
        case_sensitive=request.case_sensitive,
        ignore=request.ignore,
        description=request.description,
    )


@app.post("/check", response_model=CheckResult)
async def check(request: CheckRequest) -> CheckResult:
    """
    Check a directory or repository for forbidden patterns.

    - **path**: local directory to scan (use this OR repo_url)
    - **repo_url**: URL of a git repository to clone and scan
    - **patterns**: forbidden patterns (default: ["nomerge"])
    - **ignore**: glob rules for files to skip
    - **case_sensitive**: match patterns case-sensitively
    - **description**: optional PR description to check as well
    """
    if not request.path and not request.repo_url:
        raise HTTPException(status_code=422, detail="Provide either 'path' or 'repo_url'")

    try:
        if request.repo_url:
            logger.info(f"Checking repository: {request.repo_url}")
            with cloned_repo(request.repo_url) as repo_path:
                return _check(request, repo_path)

        logger.info(f"Checking directory: {request.path}")
        return _check(request, request.path)

    except GitCommandError as e:
        logger.error(f"Failed to clone repository: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to clone repository: {str(e)}")
    except ScanError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Check failed: {e}")
        raise HTTPException(status_code=500, detail=f"Check failed: {str(e)}")
