"""
FastAPI layer relaying uploads to remove.bg.

Endpoints:
 - GET /health
 - POST /remove-bg

Run with `bgrelay`, or `uvicorn --factory bgrelay_service.api:create_app`.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from . import config
from .errors import ClientInputError, RelayError, UpstreamError
from .upstream import IMAGE_FIELD, RemoveBgClient, Upload

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = f"No file uploaded (use field name '{IMAGE_FIELD}')."

router = APIRouter()


def get_relay_client(request: Request) -> RemoveBgClient:
    return request.app.state.relay_client


def _relay_error_handler(request: Request, exc: RelayError) -> Response:
    # 1xx, 204 and 304 responses must not carry a body.
    if exc.status_code < 200 or exc.status_code in (204, 304):
        return Response(status_code=exc.status_code)
    return PlainTextResponse(exc.body, status_code=exc.status_code)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    # The only input is the file part; a malformed one counts as missing.
    logger.info("Rejected upload: %s", [(err.get("loc"), err.get("type")) for err in exc.errors()])
    return PlainTextResponse(MISSING_FILE_MESSAGE, status_code=400)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post(
    "/remove-bg",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
def remove_bg(
    image_file: Optional[UploadFile] = File(None),
    client: RemoveBgClient = Depends(get_relay_client),
):
    if image_file is None:
        raise ClientInputError(MISSING_FILE_MESSAGE)

    try:
        upload = Upload(
            content=image_file.file.read(),
            filename=image_file.filename,
            content_type=image_file.content_type,
        )
        png_bytes = client.remove_background(upload)
    except UpstreamError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Relay to remove.bg failed: %s", exc)
        raise RelayError() from exc

    return Response(content=png_bytes, media_type="image/png")


def create_app(
    settings: Optional[config.Settings] = None,
    client: Optional[RemoveBgClient] = None,
) -> FastAPI:
    """Build the relay app around an explicit settings object and client."""
    settings = settings or config.get_settings()
    app = FastAPI(title="remove.bg Relay Service", version="0.1.0")
    app.state.relay_client = client or RemoveBgClient.from_settings(settings)

    app.add_exception_handler(RelayError, _relay_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(router)
    return app
