# services/textrazor_client.py
from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from app.config import settings
from models.extraction_models import ExtractionResult

logger = logging.getLogger(__name__)


class AdapterError(RuntimeError):
    """外部抽出サービスが使えなかったことを表す基底例外。"""


class AdapterUnavailable(AdapterError):
    """認証エラー・通信エラー・非 2xx・不正なペイロード。"""


class AdapterTimeout(AdapterError):
    """外部呼び出しがタイムアウトした。"""


def extract(text: str) -> ExtractionResult:
    """
    TextRazor API でエンティティ / トピック / フレーズを抽出する。

    - settings.textrazor_api_key が必須（未設定なら通信せずに AdapterUnavailable）
    - リトライはしない。失敗はすべて AdapterError として呼び出し元に返す
    - レスポンスの "response" オブジェクトを ExtractionResult に検証して返す
    """
    api_key = settings.textrazor_api_key
    if not api_key:
        raise AdapterUnavailable("TEXTRAZOR_API_KEY is not set")

    form = {
        "text": text,
        "extractors": settings.textrazor_extractors,
        "classifiers": settings.textrazor_classifiers,
    }
    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "X-TextRazor-Key": api_key,
    }

    logger.info("[textrazor] Request start: chars=%s", len(text))

    try:
        resp = requests.post(
            settings.textrazor_url,
            data=form,
            headers=headers,
            timeout=settings.textrazor_timeout,
        )
    except requests.Timeout as e:
        raise AdapterTimeout(
            f"TextRazor did not answer within {settings.textrazor_timeout}s"
        ) from e
    except requests.RequestException as e:
        raise AdapterUnavailable(f"TextRazor request failed: {e}") from e

    raw_text = resp.text
    logger.info(
        "[textrazor] Response: status=%s, length=%s",
        resp.status_code,
        len(raw_text),
    )

    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        # エラー時の中身を見るためのログ
        logger.error(
            "[textrazor] Non-200 status: %s body=%s",
            resp.status_code,
            raw_text[:2000],
        )
        raise AdapterUnavailable(f"TextRazor returned status {resp.status_code}") from e

    try:
        data = resp.json()
    except ValueError as e:
        raise AdapterUnavailable("TextRazor returned a non-JSON body") from e

    payload = data.get("response") if isinstance(data, dict) else None
    if not isinstance(payload, dict):
        raise AdapterUnavailable("TextRazor payload has no 'response' object")

    try:
        result = ExtractionResult.model_validate(payload)
    except ValidationError as e:
        raise AdapterUnavailable(f"TextRazor payload is malformed: {e}") from e

    logger.info(
        "[textrazor] Parsed: entities=%s topics=%s phrases=%s",
        len(result.entities),
        len(result.topics),
        len(result.phrases),
    )
    return result
