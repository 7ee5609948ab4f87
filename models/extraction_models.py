# models/extraction_models.py

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ExtractionModel(BaseModel):
    # TextRazor のレスポンスはフィールドが多いので、使わないものは無視する
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtractedEntity(_ExtractionModel):
    entity_id: str = Field("", alias="entityId")
    matched_text: Optional[str] = Field(None, alias="matchedText")
    relevance_score: float = Field(0.0, alias="relevanceScore")
    type: List[str] = Field(default_factory=list)
    frequency: Optional[int] = None


class ExtractedTopic(_ExtractionModel):
    label: str = ""
    score: float = 0.0
    frequency: Optional[int] = None


class PhraseWord(_ExtractionModel):
    token: str = ""


class ExtractedPhrase(_ExtractionModel):
    relevance_score: float = Field(0.0, alias="relevanceScore")
    words: List[PhraseWord] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """構成トークンを半角スペースで連結したフレーズ文字列。"""
        return " ".join(w.token for w in self.words)


class ExtractionResult(_ExtractionModel):
    """
    外部抽出サービス（TextRazor）の結果。
    レスポンス JSON の "response" オブジェクトをそのまま検証して作る。
    各コレクションは省略可能。
    """

    entities: List[ExtractedEntity] = Field(default_factory=list)
    topics: List[ExtractedTopic] = Field(default_factory=list)
    phrases: List[ExtractedPhrase] = Field(default_factory=list)
