from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qa_forum.api.router import router as api_router
from qa_forum.middleware import RequestLoggingMiddleware
from qa_forum.models.db import init_db
from qa_forum.services.errors import ForumError

# Configure logging using centralized config
from qa_forum.utils.logging_config import setup_logging, get_logger, LOG_DIR, LOG_LEVEL

# Initialize logging system
setup_logging(log_level=LOG_LEVEL)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="QA Forum")

    # 添加请求日志中间件（在 CORS 之前）
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization"],
    )

    logger.info(f"Log directory: {LOG_DIR}")
    logger.info("Application initialized with request logging enabled")

    @app.exception_handler(ForumError)
    async def handle_forum_error(request: Request, exc: ForumError):
        """业务异常统一映射为 HTTP 状态码"""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.on_event("startup")
    async def on_startup():
        """Initialize persistent resources when the API boots."""
        init_db()

        # 确保存在默认管理员账号
        from qa_forum.api.auth import auth_service
        auth_service.ensure_default_admin()

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    def root():
        return {"status": "ok", "message": "QA Forum is running"}

    return app


app = create_app()
