# app/graph/lg_state.py
from __future__ import annotations

from typing import Any, Dict


class GraphState(Dict[str, Any]):
    """
    LangGraph 風の「状態」コンテナ。
    実体はただの dict だが、型ヒントとして分かりやすくするためのラッパ。

    主なキー:
        text: 解析対象の本文
        extraction: 外部抽出結果（ExtractionResult | None）
        adapter_error: 外部抽出を使わなかった理由（str | None）
        resolution: KeywordResolution（どの段でキーワードが確定したか）
        keywords: 確定したキーワードリスト
        metrics: Metrics
        result: AnalysisResult
    """
    pass


def create_initial_state(text: str) -> GraphState:
    """
    ワークフロー開始時の初期 state を作成。
    リクエストごとに新しく作り、呼び出しをまたいで共有しない。
    """
    state: GraphState = GraphState()
    state["text"] = text
    state["extraction"] = None
    state["adapter_error"] = None
    state["resolution"] = None
    state["keywords"] = []
    state["progress_messages"] = []  # 各ノードからのログ的メッセージ
    state["current_node"] = None
    return state
