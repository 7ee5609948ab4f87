# agents/fallback_agent.py

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import List, Optional

from models.keyword_models import Keyword, rank_keywords

logger = logging.getLogger(__name__)

# ============================================================
# パラメータ
# ============================================================

STOP_WORDS = frozenset(
    ["the", "and", "a", "an", "in", "on", "at", "to", "for", "of", "with"]
)

# この文字数以下のトークンは捨てる
MIN_TOKEN_LEN = 3

MAX_WORD_KEYWORDS = 10
MAX_PHRASE_KEYWORDS = 5

# 最終手段で拾う単語の条件
MIN_SYNTHESIS_WORD_LEN = 4
MAX_SYNTHESIS_WORDS = 5

_NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)


# ============================================================
# ユーティリティ
# ============================================================

def _clean(token: str) -> str:
    """小文字化して記号を除去する。"""
    return _NON_WORD_RE.sub("", token.lower())


def _is_candidate(cleaned: str) -> bool:
    return len(cleaned) > MIN_TOKEN_LEN and cleaned not in STOP_WORDS


# ============================================================
# 頻度ベースの抽出
# ============================================================

def extract_fallback_keywords(text: str) -> List[Keyword]:
    """
    外部抽出が使えないときのローカル抽出。

    - 単語: 出現頻度の上位 10 件（score = max(0.5, 1 - idx*0.05)）
    - 2 語フレーズ: 隣接ペアの出現頻度の上位 5 件（score = max(0.6, 0.95 - idx*0.05)）
    - 両方をまとめて score 降順・上位 15 件

    例外は投げない。対象語が無ければ空リスト。
    """
    words = text.split()
    cleaned = [_clean(w) for w in words]

    word_freq = Counter(c for c in cleaned if _is_candidate(c))
    word_keywords = [
        Keyword(
            text=word,
            score=max(0.5, 1 - idx * 0.05),
            type="Keyword",
            frequency=freq,
        )
        for idx, (word, freq) in enumerate(word_freq.most_common(MAX_WORD_KEYWORDS))
    ]

    phrase_freq: Counter = Counter()
    for first, second in zip(cleaned, cleaned[1:]):
        if _is_candidate(first) and _is_candidate(second):
            phrase_freq[f"{first} {second}"] += 1

    phrase_keywords = [
        Keyword(
            text=phrase,
            score=max(0.6, 0.95 - idx * 0.05),
            type="Phrase",
            frequency=freq,
        )
        for idx, (phrase, freq) in enumerate(phrase_freq.most_common(MAX_PHRASE_KEYWORDS))
    ]

    ranked = rank_keywords(word_keywords + phrase_keywords)
    logger.info(
        "[fallback] words=%s candidates=%s phrases=%s -> keywords=%s",
        len(words),
        len(word_freq),
        len(phrase_freq),
        len(ranked),
    )
    return ranked


# ============================================================
# 最終手段
# ============================================================

def _distinct_tokens(words: List[str], min_len: Optional[int]) -> List[str]:
    picked: List[str] = []
    for w in words:
        if min_len is not None and len(w) <= min_len:
            continue
        if w in picked:
            continue
        picked.append(w)
        if len(picked) >= MAX_SYNTHESIS_WORDS:
            break
    return picked


def synthesize_minimal_keywords(text: str) -> List[Keyword]:
    """
    頻度集計でも 1 件も取れなかったときの最終手段。

    本文の空白区切りトークンのうち 5 文字以上のものを、初出順に重複なしで最大 5 件拾う。
    該当が 1 つも無い（短い語だけの本文）場合は長さ条件を外して同じように拾う。
    これで空でない本文なら必ず 1 件以上になる。
    """
    words = text.split()
    picked = _distinct_tokens(words, MIN_SYNTHESIS_WORD_LEN)
    if not picked:
        logger.info("[fallback] no token longer than %s chars, relaxing", MIN_SYNTHESIS_WORD_LEN)
        picked = _distinct_tokens(words, None)

    return [
        Keyword(text=word, score=round(0.9 - idx * 0.1, 2), type="Word")
        for idx, word in enumerate(picked)
    ]
