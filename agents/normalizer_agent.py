# agents/normalizer_agent.py

from __future__ import annotations

import logging
from typing import List, Set

from models.extraction_models import ExtractionResult
from models.keyword_models import MAX_KEYWORDS, Keyword, rank_keywords

logger = logging.getLogger(__name__)

# ============================================================
# 採用しきい値
# ============================================================

MIN_ENTITY_RELEVANCE = 0.5
MIN_TOPIC_SCORE = 0.5
MIN_PHRASE_RELEVANCE = 0.2

# エンティティ + トピックがこの件数未満ならフレーズで補充する
PHRASE_FILL_THRESHOLD = 10


def _add(keywords: List[Keyword], seen: Set[str], keyword: Keyword) -> None:
    """text が未登録なら追加する（同じ text は最初の 1 件だけ採用）。"""
    if keyword.text in seen:
        return
    keywords.append(keyword)
    seen.add(keyword.text)


def normalize_extraction(extraction: ExtractionResult) -> List[Keyword]:
    """
    外部抽出結果を、重複なし・スコア順のキーワードリストに整形する。

    1. relevance > 0.5 かつ matchedText を持つエンティティ
    2. score > 0.5 のトピック
    3. 10 件未満なら、relevance > 0.2 かつ 2 語以上のフレーズで最大 15 件まで補充
    4. score 降順に並べて上位 15 件

    条件を満たすものが無ければ空リストを返す（呼び出し側でフォールバックする）。
    """
    keywords: List[Keyword] = []
    seen: Set[str] = set()

    for entity in extraction.entities:
        if entity.relevance_score <= MIN_ENTITY_RELEVANCE or not entity.matched_text:
            continue
        _add(
            keywords,
            seen,
            Keyword(
                text=entity.entity_id,
                score=entity.relevance_score,
                type=entity.type[0] if entity.type else "Entity",
                frequency=entity.frequency or 1,
            ),
        )

    for topic in extraction.topics:
        if topic.score <= MIN_TOPIC_SCORE:
            continue
        _add(
            keywords,
            seen,
            Keyword(
                text=topic.label,
                score=topic.score,
                type="Topic",
                frequency=topic.frequency or 1,
            ),
        )

    if len(keywords) < PHRASE_FILL_THRESHOLD:
        candidates = [
            p
            for p in extraction.phrases
            if p.relevance_score > MIN_PHRASE_RELEVANCE and len(p.words) > 1
        ]
        # 補充枠は先に切り出す（重複で弾かれた分は埋め直さない）
        for phrase in candidates[: MAX_KEYWORDS - len(keywords)]:
            _add(
                keywords,
                seen,
                Keyword(
                    text=phrase.text,
                    score=phrase.relevance_score,
                    type="Phrase",
                    frequency=1,
                ),
            )

    ranked = rank_keywords(keywords)
    logger.info(
        "[normalizer] entities=%s topics=%s phrases=%s -> keywords=%s",
        len(extraction.entities),
        len(extraction.topics),
        len(extraction.phrases),
        len(ranked),
    )
    return ranked
