# devflow/api/v1/errors.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from devflow.core.errors import DevflowError

async def devflow_error_handler(request: Request, exc: DevflowError) -> JSONResponse:
    """Turn a service error into the `{"success": false, "error": {...}}` envelope."""
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DevflowError, devflow_error_handler)
