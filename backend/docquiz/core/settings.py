"""
アプリケーション設定（環境変数・定数の一元管理）

【初心者向け】
- Pydantic Settings: 環境変数や.envを読んで型付きで扱うための仕組み
- ここで定義した値は docquiz.core.settings.settings から参照できる
- 主な分類: CORS, ログ, Gemini(LLM), 文書解析, Quiz
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    アプリケーション設定クラス
    環境変数（または.env）の値が自動でここにマッピングされる
    """

    # CORS設定
    cors_origins: List[str] = ["http://localhost:3000"]

    # ログ設定
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="ルートロガーのログレベル（DEBUG, INFO, WARNING など）"
    )

    # Gemini API設定
    gemini_api_key: str = Field(
        default="",
        alias="GEMINI_API_KEY",
        description="Gemini APIキー"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        alias="GEMINI_MODEL",
        description="使用するGeminiモデル名（PDF入力に対応したモデルを指定）"
    )
    gemini_timeout_sec: int = Field(
        default=120,
        alias="GEMINI_TIMEOUT_SEC",
        description="Gemini API呼び出しのタイムアウト秒数（PDF全文抽出を考慮して長め）"
    )
    gemini_max_attempts: int = Field(
        default=1,
        ge=1,
        alias="GEMINI_MAX_ATTEMPTS",
        description="クォータ制限（429）時の最大試行回数（1=リトライしない）"
    )

    # 文書構造解析の設定（プロンプトに埋め込む分割数の目安）
    analysis_min_parts: int = Field(
        default=5,
        ge=1,
        alias="ANALYSIS_MIN_PARTS",
        description="文書を分割するパート数の下限（モデルへの依頼値、強制はしない）"
    )
    analysis_max_parts: int = Field(
        default=10,
        ge=1,
        alias="ANALYSIS_MAX_PARTS",
        description="文書を分割するパート数の上限（モデルへの依頼値、強制はしない）"
    )

    # Quiz生成の設定
    quiz_max_source_chars: int = Field(
        default=8000,
        ge=1,
        alias="QUIZ_MAX_SOURCE_CHARS",
        description="Quiz生成時にプロンプトへ埋め込む本文の最大文字数（超過分は切り捨て）"
    )
    quiz_question_count: int = Field(
        default=5,
        ge=1,
        alias="QUIZ_QUESTION_COUNT",
        description="1回のQuiz生成で依頼する問題数"
    )

    # Pydantic v2の設定（Configクラスの代わりにmodel_configを使用）
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Fieldのaliasとフィールド名の両方で読み込み可能
        extra="ignore"  # 未定義の環境変数を無視
    )


# グローバル設定インスタンス
settings = Settings()
