# app/main.py
import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.routes import error_response, router as api_router
from app.config import settings

# ============================================================
# ロガー設定
# ============================================================

root_logger = logging.getLogger()

# コンソールに出したいので、ハンドラを直付け
if not root_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

root_logger.setLevel(settings.log_level.upper())

logger = logging.getLogger(__name__)

# 全レスポンスに付けるセキュリティヘッダ
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}

app = FastAPI(title="SEO Text Analyzer")


def _unexpected_response(request: Request, exc: Exception) -> JSONResponse:
    """想定外のエラーは 500。詳細はログにだけ残す（production ではメッセージも隠す）。"""
    logger.error("[http] unexpected error on %s: %s", request.url.path, exc, exc_info=exc)
    message = "An unexpected error occurred" if settings.is_production else str(exc)
    return error_response(500, "Failed to analyze text", message)


@app.middleware("http")
async def log_and_secure(request: Request, call_next):
    """1 リクエスト 1 行のアクセスログ + セキュリティヘッダ付与。"""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:  # noqa: BLE001
        response = _unexpected_response(request, exc)
    elapsed_ms = (time.perf_counter() - started) * 1000

    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)

    logger.info(
        "[http] %s %s status=%s elapsed_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# 後から追加したミドルウェアが外側になる。500 にも CORS ヘッダを付けるため最後に追加する
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def handle_invalid_request(request: Request, exc: RequestValidationError):
    """本文が JSON でない・text が文字列でない場合も { error, message } で 400 を返す。"""
    logger.warning("[http] invalid request on %s: %s", request.url.path, exc.errors())
    return error_response(
        400,
        "Invalid request body",
        'Please send JSON of the form {"text": "..."}',
    )


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Default route is working!"


app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    logger.info(
        "[main] starting on port %s (TextRazor API key present: %s)",
        settings.port,
        bool(settings.textrazor_api_key),
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
