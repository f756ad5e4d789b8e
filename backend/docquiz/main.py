"""
FastAPIアプリケーションのエントリーポイント（アプリの起動入口）

【初心者向け】
このファイルはDocQuizのバックエンドAPIサーバーを起動する「玄関」です。
- FastAPI: PythonのWebフレームワーク。REST APIを簡単に作れる
- /health, /documents, /quiz のルート（APIの窓口）を登録します
- PDFの解析・本文抽出・クイズ生成はすべて Gemini API に1回ずつ問い合わせるだけで、
  サーバー側には何も保存しません

実行方法:
    pip install -e .
    uvicorn docquiz.main:app --reload --port 8000
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docquiz.core.settings import settings
from docquiz.routers import documents, health, quiz

# ログ設定（ルートロガーに1回だけ設定）
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="DocQuiz API",
    description="Document analysis, part extraction and quiz generation API",
    version="0.1.0",
)

# CORS設定: フロントエンドからAPIを呼ぶ際の跨域通信を許可
# 環境変数 CORS_ORIGINS で許可するオリジン（例: http://localhost:3000）を指定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ルーター登録: 各APIの「窓口」をURLパスに割り当て
# /health=死活確認, /documents=文書解析・本文抽出, /quiz=クイズ生成・採点
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(documents.router, prefix="/documents", tags=["documents"])
app.include_router(quiz.router, prefix="/quiz", tags=["quiz"])

logger.info(f"DocQuiz API 初期化完了: model={settings.gemini_model}")


@app.get("/")
async def root():
    """ルートエンドポイント"""
    return {"message": "DocQuiz API"}
