# app/graph/lg_workflow.py
from __future__ import annotations

import logging
from typing import Optional

from app.graph.lg_state import GraphState, create_initial_state
from app.graph import nodes
from models.analysis_models import AnalysisResult, KeywordResolution
from models.extraction_models import ExtractionResult
from services import textrazor_client

logger = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """解析対象の本文が空、または空白だけ。"""


def _resolve(state: GraphState) -> GraphState:
    # normalize → fallback → minimal_synthesis の順に、確定した段で止まる
    state = nodes.normalize_node(state)
    state = nodes.fallback_node(state)
    state = nodes.minimal_synthesis_node(state)
    return state


def resolve_keywords(
    text: str,
    extraction: Optional[ExtractionResult],
) -> KeywordResolution:
    """
    本文と外部抽出結果（無ければ None）からキーワードを確定する。
    ネットワークには触らない純粋な処理。
    """
    state = create_initial_state(text)
    state["extraction"] = extraction
    if extraction is None:
        state["adapter_error"] = "no external extraction provided"
    return _resolve(state)["resolution"]


def run_workflow(
    text: str,
    extractor: Optional[nodes.Extractor] = None,
) -> GraphState:
    """
    /api/analyze 用のシンプルな直列ワークフロー。

    extract → normalize → (fallback) → (minimal_synthesis) → metrics

    extractor を省略した場合は TextRazor を使う。
    """
    if not text or not text.strip():
        raise InvalidInput("text must not be empty")

    if extractor is None:
        extractor = textrazor_client.extract

    logger.info("[lg_workflow] run_workflow start chars=%s", len(text))

    state = create_initial_state(text)

    # 1) 外部抽出（失敗してもここでは止まらない）
    state = nodes.extract_node(state, extractor)

    # 2) キーワード確定
    state = _resolve(state)

    # 3) 指標計算
    state = nodes.metrics_node(state)

    logger.info(
        "[lg_workflow] run_workflow done resolution=%s keywords=%s",
        state["resolution"].kind,
        len(state["keywords"]),
    )
    return state


def analyze(
    text: str,
    extractor: Optional[nodes.Extractor] = None,
) -> AnalysisResult:
    """本文を解析して AnalysisResult を返すエントリポイント。"""
    return run_workflow(text, extractor=extractor)["result"]
