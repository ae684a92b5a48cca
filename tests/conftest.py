import itertools
import os
import sys
import tempfile
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# 在导入 qa_forum 之前设置，避免测试在仓库目录下写日志和数据库
_TMP_DIR = Path(tempfile.mkdtemp(prefix="qa_forum_tests_"))
os.environ.setdefault("QA_FORUM_LOG_DIR", str(_TMP_DIR / "logs"))
os.environ.setdefault("QA_FORUM_DB_PATH", str(_TMP_DIR / "default.db"))
os.environ.setdefault("QA_FORUM_BCRYPT_ROUNDS", "4")

from qa_forum.models import db  # noqa: E402
from qa_forum.models.user_account import UserRole  # noqa: E402
from qa_forum.services.auth_service import AuthService  # noqa: E402

DEFAULT_PASSWORD = "password123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """每个测试使用独立的 SQLite 文件"""
    engine = db.create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(db, "engine", engine)
    db.init_db()
    yield engine
    engine.dispose()


@pytest.fixture
def auth_service():
    return AuthService()


@pytest.fixture
def make_user(auth_service):
    counter = itertools.count(1)

    def _make(role: str = UserRole.USER.value, password: str = DEFAULT_PASSWORD):
        n = next(counter)
        return auth_service.register_user(
            name=f"user{n}",
            email=f"user{n}@example.com",
            password=password,
            role=role,
        )

    return _make


@pytest.fixture
def author(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN.value)


@pytest.fixture
async def api_client():
    from qa_forum.main import create_app

    app = create_app()
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://qaforum",
    ) as client:
        yield client
