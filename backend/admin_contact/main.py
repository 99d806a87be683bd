# backend/admin_contact/main.py

"""
バックエンドアプリケーションのエントリーポイント。

- /contact/admin: システム管理者への問い合わせ送信
- /health: ヘルスチェック
"""

from fastapi import FastAPI

from admin_contact.contact.router import router as contact_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。
    """
    app = FastAPI(title="Admin Contact Backend")

    app.include_router(contact_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
