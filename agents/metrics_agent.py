# agents/metrics_agent.py

from __future__ import annotations

import math
import re
from typing import List

from models.analysis_models import Metrics
from models.keyword_models import Keyword

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_LETTER_RE = re.compile(r"[^a-z]")
_VOWEL_RUN_RE = re.compile(r"[aeiouy]+")

# 語末の無音 e / es / ed（"-le" は音節として残す）
_SILENT_ENDING_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
# "my" "fly" のように子音 + 末尾 y だけの語
_CONSONANT_Y_RE = re.compile(r"^[^aeiouy]*y$")


def count_syllables(word: str) -> int:
    """英単語の音節数をざっくり数える（母音の連続を 1 音節とする簡易ヒューリスティック）。"""
    word = _NON_LETTER_RE.sub("", word.lower())
    if not word:
        return 0

    count = len(_VOWEL_RUN_RE.findall(word))
    if _SILENT_ENDING_RE.search(word):
        count -= 1
    if _CONSONANT_Y_RE.match(word):
        count -= 1

    # 1 語あたり最低 1 音節
    return max(count, 1)


def _format_one_decimal(value: float) -> str:
    return f"{value:.1f}"


def _count_occurrences(text: str, phrase: str) -> int:
    """phrase の出現回数（大文字小文字無視・単語境界・語間の空白は任意長）。"""
    parts = phrase.lower().split()
    if not parts:
        return 0
    pattern = r"\b" + r"\s+".join(re.escape(p) for p in parts) + r"\b"
    return len(re.findall(pattern, text, flags=re.IGNORECASE))


def keyword_occurrences(text: str, keyword: Keyword) -> int:
    """frequency があればそれを、無ければ本文から数え直した出現回数を返す。"""
    if keyword.frequency:
        return keyword.frequency
    return _count_occurrences(text, keyword.text)


def calculate_metrics(text: str, keywords: List[Keyword]) -> Metrics:
    """
    本文とキーワードから指標を計算する。

    - readability_score: Flesch Reading Ease を 0〜100 に丸めた整数
    - keyword_density: 最上位キーワードの出現回数 / 語数 * 100（上限なし）
    - content_length: 空白区切りの語数（0 もあり得る）
    - avg_sentence_length: 1 文あたりの語数

    keywords は score 降順を前提とし、先頭を最上位として扱う。空なら密度は 0.0。
    """
    words = text.split()
    content_length = len(words)
    # ゼロ除算回避用。出力の content_length には使わない
    word_count = max(content_length, 1)

    # 空白だけの区切りも 1 文として数える
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s]
    sentence_count = max(len(sentences), 1)

    avg_words_per_sentence = word_count / sentence_count

    total_syllables = sum(count_syllables(w) for w in words)
    avg_syllables_per_word = total_syllables / word_count

    flesch = 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word
    readability = int(math.floor(max(0.0, min(100.0, flesch)) + 0.5))

    density = 0.0
    if keywords:
        density = keyword_occurrences(text, keywords[0]) / word_count * 100

    return Metrics(
        readability_score=readability,
        keyword_density=_format_one_decimal(density),
        content_length=content_length,
        avg_sentence_length=_format_one_decimal(avg_words_per_sentence),
    )
