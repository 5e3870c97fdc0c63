import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from xrpl_agent import __version__
from xrpl_agent.api.routes import router
from xrpl_agent.core.client import XrplClient
from xrpl_agent.core.errors import (
    AuthenticationError,
    LedgerConnectionError,
    LedgerRequestError,
    SubmissionError,
    TransactionBuildError,
    TransactionValidationError,
    WorkflowStageError,
    XrplAgentError,
)
from xrpl_agent.core.registry import ConnectionRegistry
from xrpl_agent.tools.safety import SafetyConfig, SafetyViolation
from xrpl_agent.tools.toolkit import DEFAULT_NETWORK, ToolInputError, UnknownToolError, XrplToolkit

logger = logging.getLogger("xrpl_agent.api")

STATUS_BY_ERROR: list[tuple[type[XrplAgentError], int]] = [
    (SafetyViolation, 403),
    (UnknownToolError, 404),
    (AuthenticationError, 400),
    (TransactionBuildError, 400),
    (TransactionValidationError, 400),
    (ToolInputError, 400),
    (LedgerConnectionError, 502),
    (SubmissionError, 502),
    (LedgerRequestError, 502),
    (WorkflowStageError, 502),
]


def status_for(exc: XrplAgentError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes", "on")


def safety_from_env() -> SafetyConfig:
    allowed = os.getenv("XRPL_AGENT_ALLOWED_NETWORKS", "")
    return SafetyConfig(
        rate_limit_per_hour=int(os.getenv("XRPL_AGENT_RATE_LIMIT", "20")),
        dry_run=_env_flag("XRPL_AGENT_DRY_RUN"),
        allow_mainnet_seed=_env_flag("XRPL_AGENT_ALLOW_MAINNET_SEED"),
        allowed_networks=[n.strip() for n in allowed.split(",") if n.strip()],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load configuration
    network = os.getenv("XRPL_NETWORK", DEFAULT_NETWORK)
    timeout = float(os.getenv("XRPL_AGENT_TIMEOUT", "30"))
    safety = safety_from_env()

    if safety.dry_run:
        logger.warning("XRPL_AGENT_DRY_RUN is set: transactions are validated but never submitted.")

    registry = ConnectionRegistry(lambda url: XrplClient(url, timeout=timeout))
    app.state.toolkit = XrplToolkit(registry, safety=safety, default_network=network)

    yield
    await registry.close_all()


app = FastAPI(
    title="XRPL Agent SDK",
    description="REST API exposing XRP Ledger agent tools and the token issuance workflow",
    version=__version__,
    lifespan=lifespan,
)

# Allow CORS for easy frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(router)


@app.exception_handler(XrplAgentError)
async def agent_error_handler(request: Request, exc: XrplAgentError):
    content = exc.to_dict()
    if isinstance(exc, WorkflowStageError):
        content["context"] = exc.context.to_agent_summary()
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status, content=content)


@app.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "version": __version__}
