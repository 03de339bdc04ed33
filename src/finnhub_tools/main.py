from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi.responses import Response

from .config import APIConfig, settings
from .logging import setup_logging, correlation_id_middleware
from .schemas import InvokeRequest, InvokeResponse, TextContent, ToolInfo, ToolListResponse
from .registry import ToolRegistry, build_registry

REQS = Counter("tool_invocations_total", "Total tool invocations", ["tool", "outcome"])
LAT = Histogram("tool_invocation_duration_ms", "Tool invocation duration in ms", ["tool"])
ERRORS = Counter("tool_errors_total", "Tool invocation errors by type", ["tool", "error_type"])


def create_app(registry: Optional[ToolRegistry] = None) -> FastAPI:
    """Build the HTTP app around a tool registry.

    Args:
        registry: Registry to expose. If None, the Finnhub tools are built from
                  FINNHUB_* environment variables.
    """
    if registry is None:
        registry = build_registry(APIConfig.from_env())

    app = FastAPI(title="Finnhub Tools", version="0.1.0")
    app.middleware("http")(correlation_id_middleware)
    app.state.registry = registry

    @app.get("/health")
    def health():
        return {"status": "ok", "service": settings.service_name, "tools": len(registry)}

    @app.get("/metrics")
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/tools", response_model=ToolListResponse)
    def list_tools():
        return ToolListResponse(tools=[ToolInfo(**entry) for entry in registry.list_tools()])

    @app.post("/tools/{name}/invoke", response_model=InvokeResponse)
    def invoke(name: str, req: InvokeRequest, request: Request):
        if name not in registry:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

        correlation_id = getattr(request.state, "correlation_id", "unknown")
        invocation = registry.handle(name, req.arguments, correlation_id=correlation_id)
        result = invocation.result

        REQS.labels(tool=name, outcome="error" if result.is_error else "ok").inc()
        LAT.labels(tool=name).observe(invocation.elapsed_ms)
        if result.error is not None:
            ERRORS.labels(tool=name, error_type=result.error.__class__.__name__).inc()

        return InvokeResponse(
            tool=name,
            content=[TextContent(text=result.text)],
            isError=result.is_error,
            trace_id=correlation_id,
            error=result.error.to_dict() if result.error is not None else None,
        )

    return app


setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("finnhub_tools.main:app", host=settings.host, port=settings.port, reload=True)
