import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from article_drafter.api.schemas import ErrorResponse, GenerateResponse
from article_drafter.service.generator import GenerateService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="article-drafter", version="0.1.0")
service = GenerateService()


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post(
    "/generate",
    response_model=GenerateResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 429, 500, 504)},
)
async def generate(request: Request) -> JSONResponse:
    # Body is validated by the service in a fixed order, so it is read raw here.
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("generate.invalid_body content_type=%s", request.headers.get("content-type"))
        payload = None
    result = await service.generate(payload)
    return JSONResponse(result.as_payload(), status_code=result.status_code)
