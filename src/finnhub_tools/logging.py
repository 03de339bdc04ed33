import logging
import uuid
from fastapi import Request

logger = logging.getLogger("finnhub_tools")

def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
    )

def get_logger(component: str) -> logging.Logger:
    """Child logger under the finnhub_tools namespace, e.g. finnhub_tools.rest."""
    return logger.getChild(component)

async def correlation_id_middleware(request: Request, call_next):
    cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
    request.state.correlation_id = cid
    response = await call_next(request)
    response.headers["x-correlation-id"] = cid
    return response
