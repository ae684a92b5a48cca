import os
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

# ensure models registered
from qa_forum.models import user_account  # noqa: F401
from qa_forum.models import question  # noqa: F401
from qa_forum.models import answer  # noqa: F401
from qa_forum.models import like  # noqa: F401

# 数据库存放在项目根目录下，可用环境变量覆盖
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent.parent / "database.db"
DB_PATH = Path(os.getenv("QA_FORUM_DB_PATH", DEFAULT_DB_PATH))
DATABASE_URL = f"sqlite:///{DB_PATH}"


def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite 默认不执行外键约束，级联删除依赖它"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str = DATABASE_URL) -> Engine:
    db_engine = create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )
    event.listen(db_engine, "connect", _enable_foreign_keys)
    return db_engine


# 创建 engine
engine = create_db_engine()


def init_db():
    """初始化数据库，创建所有表。"""
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """获取 Session，用于 CRUD 操作"""
    return Session(engine, expire_on_commit=False)
