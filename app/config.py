# app/config.py

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    アプリ全体で使う設定クラス。
    .env から環境変数を読み込み、属性として参照できるようにする。
    """

    # ---------- TextRazor ----------
    # TEXTRAZOR_API_KEY=... を .env に書く想定
    # 未設定の場合は外部抽出をスキップしてローカル集計にフォールバックする
    textrazor_api_key: str | None = None
    textrazor_url: str = "https://api.textrazor.com/"

    # 外部呼び出しのタイムアウト（秒）。超過時は AdapterTimeout 扱い
    textrazor_timeout: float = 5.0

    textrazor_extractors: str = "entities,topics,words,phrases"
    textrazor_classifiers: str = "textrazor_newscodes"

    # ---------- サーバ ----------
    # production の場合、500 エラーの詳細はレスポンスに含めない
    environment: str = "development"
    port: int = 5000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # リクエスト本文の上限（UTF-8 バイト数）
    max_text_bytes: int = 1024 * 1024

    # ---------- Pydantic Settings 設定 ----------
    model_config = SettingsConfigDict(
        env_file=".env",            # .env を読む
        env_file_encoding="utf-8",
        extra="ignore",             # 定義外の環境変数があっても無視（エラーにしない）
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Settings をシングルトン的に使うためのヘルパ。"""
    return Settings()


# 他のモジュールからは `from app.config import settings` で利用
settings = get_settings()
