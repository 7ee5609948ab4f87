# app/api/routes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.graph.lg_workflow import run_workflow
from app.graph.nodes import Extractor
from models.analysis_models import AnalysisResult
from services import textrazor_client

logger = logging.getLogger(__name__)

router = APIRouter()


# --------- Request モデル ---------


class AnalyzeRequest(BaseModel):
    # 未指定も 400 で返したいので Optional にしておく
    text: Optional[str] = None


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """{ error, message } 形式のエラーレスポンス。"""
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def get_extractor() -> Extractor:
    """外部抽出の依存。テストでは app.dependency_overrides で差し替える。"""
    return textrazor_client.extract


# --------- エンドポイント ---------


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
)
def api_analyze(
    payload: AnalyzeRequest,
    extractor: Extractor = Depends(get_extractor),
):
    """
    本文からキーワードと読みやすさ指標を返すメインAPI。

    1) 外部抽出 (TextRazor)
    2) 整形 or ローカル頻度集計 or 単語拾い
    3) 指標計算
    """
    text = payload.text
    if not text or not text.strip():
        return error_response(
            400,
            "Text is required for analysis",
            "Please provide some content to analyze",
        )

    if len(text.encode("utf-8")) > settings.max_text_bytes:
        return error_response(
            413,
            "Text is too large",
            f"Please keep the content under {settings.max_text_bytes} bytes",
        )

    logger.info("[api.analyze] start chars=%s", len(text))

    state = run_workflow(text, extractor=extractor)
    result: AnalysisResult = state["result"]

    logger.info(
        "[api.analyze] done resolution=%s keywords=%s",
        state["resolution"].kind,
        len(result.keywords),
    )
    return result
