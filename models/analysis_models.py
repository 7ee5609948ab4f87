# models/analysis_models.py

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from models.keyword_models import CamelModel, Keyword


class Metrics(CamelModel):
    """
    読みやすさ・密度などの指標。
    keyword_density / avg_sentence_length は小数 1 桁の文字列（例: "2.5"）。
    """

    readability_score: int = Field(..., ge=0, le=100)
    keyword_density: str
    content_length: int = Field(..., ge=0)
    avg_sentence_length: str


class AnalysisResult(CamelModel):
    keywords: List[Keyword]
    metrics: Metrics


# -----------------------------------------
# キーワード決定経路（どの段で確定したか）
# -----------------------------------------
class NormalizedResolution(CamelModel):
    """外部抽出の結果を整形して確定した。"""

    kind: Literal["normalized"] = "normalized"
    keywords: List[Keyword]


class FallbackResolution(CamelModel):
    """ローカル頻度集計で確定した。reason は外部経路を使わなかった理由。"""

    kind: Literal["fallback"] = "fallback"
    keywords: List[Keyword]
    reason: Optional[str] = None


class MinimalSynthesisResolution(CamelModel):
    """どの段でも取れなかったため、本文の単語をそのまま拾った。"""

    kind: Literal["minimal_synthesis"] = "minimal_synthesis"
    keywords: List[Keyword]


KeywordResolution = Annotated[
    Union[NormalizedResolution, FallbackResolution, MinimalSynthesisResolution],
    Field(discriminator="kind"),
]
