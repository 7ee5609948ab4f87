# app/graph/nodes.py
from __future__ import annotations

import logging
from typing import Callable, List

from app.graph.lg_state import GraphState
from agents.fallback_agent import extract_fallback_keywords, synthesize_minimal_keywords
from agents.metrics_agent import calculate_metrics
from agents.normalizer_agent import normalize_extraction
from services.textrazor_client import AdapterError

from models.analysis_models import (
    AnalysisResult,
    FallbackResolution,
    MinimalSynthesisResolution,
    NormalizedResolution,
)
from models.extraction_models import ExtractionResult
from models.keyword_models import Keyword

logger = logging.getLogger(__name__)

# 外部抽出の差し替え口（テストでは成功 / 失敗 / 空結果を返す関数を渡す）
Extractor = Callable[[str], ExtractionResult]


def _log_progress(state: GraphState, node: str, message: str) -> GraphState:
    """
    進捗ログを state に積むユーティリティ。
    state は dict (GraphState) として扱う。
    """
    line = f"[{node}] {message}"

    messages: List[str] = list(state.get("progress_messages", []))
    messages.append(line)

    state["progress_messages"] = messages
    state["current_node"] = node

    logger.info(line)
    return state


# ---------- 外部抽出ノード ----------


def extract_node(state: GraphState, extractor: Extractor) -> GraphState:
    """
    外部抽出ノード:
    extractor を 1 回だけ呼ぶ。失敗しても例外は外に出さず、
    extraction=None と理由を state に残してフォールバックに回す。
    """
    state = _log_progress(state, "extract", "start: calling external extractor")

    try:
        state["extraction"] = extractor(state["text"])
    except AdapterError as e:
        logger.warning("[extract_node] external extraction failed, fallback used: %s", e)
        state["extraction"] = None
        state["adapter_error"] = str(e) or type(e).__name__
        return _log_progress(state, "extract", f"failed: {type(e).__name__}")

    return _log_progress(state, "extract", "done: extraction received")


# ---------- Normalize ノード ----------


def normalize_node(state: GraphState) -> GraphState:
    """
    Normalize ノード:
    外部抽出結果をキーワードリストに整形する。1 件以上あれば確定。
    """
    extraction = state.get("extraction")
    if extraction is None:
        return state

    state = _log_progress(state, "normalize", "start: normalizing extraction")

    keywords: List[Keyword] = normalize_extraction(extraction)
    if keywords:
        state["keywords"] = keywords
        state["resolution"] = NormalizedResolution(keywords=keywords)
        return _log_progress(state, "normalize", f"done: {len(keywords)} keywords")

    return _log_progress(state, "normalize", "done: no qualifying keywords")


# ---------- Fallback ノード ----------


def fallback_node(state: GraphState) -> GraphState:
    """
    Fallback ノード:
    本文の頻度集計からキーワードを作る。1 件以上あれば確定。
    """
    if state.get("resolution") is not None:
        return state

    state = _log_progress(state, "fallback", "start: local frequency analysis")

    keywords = extract_fallback_keywords(state["text"])
    if keywords:
        reason = state.get("adapter_error")
        if reason is None and state.get("extraction") is not None:
            reason = "external extraction yielded no keywords"
        state["keywords"] = keywords
        state["resolution"] = FallbackResolution(keywords=keywords, reason=reason)
        return _log_progress(state, "fallback", f"done: {len(keywords)} keywords")

    return _log_progress(state, "fallback", "done: no qualifying tokens")


# ---------- 最終手段ノード ----------


def minimal_synthesis_node(state: GraphState) -> GraphState:
    """
    最終手段ノード:
    どの段でも取れなかった場合に、本文の単語をそのままキーワードにする。
    """
    if state.get("resolution") is not None:
        return state

    state = _log_progress(state, "minimal_synthesis", "start: picking words from text")

    keywords = synthesize_minimal_keywords(state["text"])
    state["keywords"] = keywords
    state["resolution"] = MinimalSynthesisResolution(keywords=keywords)

    return _log_progress(state, "minimal_synthesis", f"done: {len(keywords)} keywords")


# ---------- Metrics ノード ----------


def metrics_node(state: GraphState) -> GraphState:
    """
    Metrics ノード:
    確定したキーワードで指標を計算し、最終結果をまとめる。
    """
    state = _log_progress(state, "metrics", "start: calculating metrics")

    keywords: List[Keyword] = state.get("keywords", [])
    metrics = calculate_metrics(state["text"], keywords)

    state["metrics"] = metrics
    state["result"] = AnalysisResult(keywords=keywords, metrics=metrics)

    return _log_progress(
        state,
        "metrics",
        f"done: readability={metrics.readability_score} density={metrics.keyword_density}",
    )
