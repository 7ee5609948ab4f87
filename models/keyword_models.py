# models/keyword_models.py

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# -----------------------------------------
# キーワード種別
# -----------------------------------------
KeywordType = Literal[
    "Entity",   # 外部抽出のエンティティ（型ラベルが無い場合）
    "Topic",    # 外部抽出のトピック
    "Phrase",   # 複数語のフレーズ
    "Word",     # 最終手段で拾った単語
    "Keyword",  # ローカル頻度集計によるキーワード
]

# 1 回の解析で返すキーワードの最大件数
MAX_KEYWORDS = 15


class CamelModel(BaseModel):
    """JSON 出力を camelCase にするための共通ベース。"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------
# キーワード 1 件
# -----------------------------------------
class Keyword(CamelModel):
    """スコア付きのキーワード（単語・フレーズ・エンティティ・トピック）。

    Attributes:
        text (str): キーワード文字列。重複排除のキー（大文字小文字は区別）。
        score (float): 関連度スコア（0〜1）。
        type (str): KeywordType のいずれか。
            エンティティの場合は外部抽出の型ラベル（例: "Person"）をそのまま使う。
        frequency (int | None): 出現回数。不明な場合は None。
    """

    text: str
    score: float = Field(..., ge=0.0, le=1.0)
    type: str
    frequency: Optional[int] = Field(None, ge=0)


def rank_keywords(keywords: List[Keyword], limit: int = MAX_KEYWORDS) -> List[Keyword]:
    """score の高い順に並べて上位 limit 件を返す（同点は元の順序を維持）。"""
    return sorted(keywords, key=lambda k: k.score, reverse=True)[:limit]
