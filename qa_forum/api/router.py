from fastapi import APIRouter

from qa_forum.api.answers import router as answers_router
from qa_forum.api.auth import router as auth_router
from qa_forum.api.likes import router as likes_router
from qa_forum.api.questions import router as questions_router
from qa_forum.api.users import router as users_router


router = APIRouter()

router.include_router(auth_router)
router.include_router(users_router)
router.include_router(questions_router)
router.include_router(answers_router)
router.include_router(likes_router)


@router.get("/ping")
def ping():
    return {"msg": "pong"}
