from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources.types import NoDecode


_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})
PRONUNCIATION_SOURCES = frozenset({"cmudict", "none"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    環境変数から読み込まれるアプリ設定クラス。
    - environment: 実行環境（development/staging/production など）
    - pronunciation_source: 発音辞書のソース（cmudict / none）
    - transcription_*: 変換エンジンのキャッシュ・デバッグ設定
    """

    environment: str = Field(
        default="development",
        description="Runtime environment / 実行環境",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level / ルートロガーのログレベル",
    )

    # --- 発音辞書 ---
    pronunciation_source: str = Field(
        default="cmudict",
        description="Pronunciation dictionary backend (cmudict|none) / 発音辞書のバックエンド",
    )

    # --- 変換エンジン ---
    transcription_cache_enabled: bool = Field(
        default=True,
        description="Memoize transcriptions per raw word / 単語ごとの変換結果をメモ化する",
    )
    transcription_debug: bool = Field(
        default=False,
        description="Log pronunciation and alignment for every word / 単語ごとに発音とアラインメントをログ出力",
    )

    # --- バッチ API の上限 ---
    batch_max_texts: int = Field(
        default=500,
        description="Max texts per batch request / バッチ1回あたりの最大テキスト数",
    )
    batch_max_chars: int = Field(
        default=20000,
        description="Max characters per text in a batch / バッチ内テキスト1件あたりの最大文字数",
    )

    # --- API サーバ（tengwar-serve） ---
    api_host: str = Field(
        default="127.0.0.1",
        description="Bind address for tengwar-serve / API サーバの待受アドレス",
    )
    api_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Bind port for tengwar-serve / API サーバの待受ポート",
    )

    allowed_cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(),
        description="Comma separated CORS origins / CORS 許可オリジン（カンマ区切り）",
    )

    # Pydantic v2 settings config
    # - env_file: .env を読み込む
    # - extra: .env に存在する未使用キーを無視
    # - case_sensitive: 環境変数キーの大小文字を区別しない
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        text = str(value or "").strip().upper()
        if text not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return text

    @field_validator("pronunciation_source", mode="before")
    @classmethod
    def _normalize_pronunciation_source(cls, value: object) -> str:
        text = str(value or "").strip().lower()
        if text not in PRONUNCIATION_SOURCES:
            raise ValueError(
                f"PRONUNCIATION_SOURCE must be one of {sorted(PRONUNCIATION_SOURCES)}"
            )
        return text

    @field_validator("batch_max_texts", "batch_max_chars")
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("batch limits must be positive")
        return value

    @field_validator("allowed_cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> tuple[str, ...]:
        """Accept comma separated strings as well as sequences.

        `.env` ではカンマ区切りの文字列で指定されるため、空要素を除いて
        タプルへ正規化する。
        """

        if value is None:
            return ()
        if isinstance(value, str):
            items = value.split(",")
        else:
            items = list(value)  # type: ignore[arg-type]
        return tuple(item.strip() for item in items if item and item.strip())


settings = Settings()
