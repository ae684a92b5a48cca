import pytest
from sqlmodel import select

from qa_forum.models.answer import Answer, AnswerRead
from qa_forum.models.db import get_session
from qa_forum.models.like import Like
from qa_forum.models.question import Question, QuestionRead
from qa_forum.models.user_account import SessionToken
from qa_forum.services.answer_service import AnswerService
from qa_forum.services.errors import ForumError, NotFound, PermissionDenied
from qa_forum.services.like_service import AnswerTarget, LikeService, QuestionTarget
from qa_forum.services.question_service import QuestionService
from qa_forum.services.user_service import UserService


@pytest.fixture
def questions():
    return QuestionService()


@pytest.fixture
def answers():
    return AnswerService()


@pytest.fixture
def likes():
    return LikeService()


def _count(model) -> int:
    with get_session() as session:
        return len(session.exec(select(model)).all())


def test_create_question_is_not_liked(questions, author):
    created = questions.create_question("Title", "Body", author)

    assert isinstance(created, QuestionRead)
    assert created.author_id == author.id
    assert created.is_liked is False
    assert created.like_count == 0


def test_update_question_by_author_keeps_missing_fields(questions, author):
    created = questions.create_question("Title", "Body", author)

    updated = questions.update_question(created.id, author, content="New body")

    assert updated.title == "Title"
    assert updated.content == "New body"
    assert updated.updated_at >= created.updated_at


@pytest.mark.parametrize("acting", ["author", "admin"])
def test_question_update_and_delete_allowed(request, questions, author, acting):
    user = request.getfixturevalue(acting)
    created = questions.create_question("Title", "Body", author)

    assert questions.update_question(created.id, user, title="Edited").title == "Edited"
    questions.delete_question(created.id, user)

    with pytest.raises(NotFound):
        questions.find_one(created.id)


def test_question_mutation_denied_for_other_user(questions, author, other_user):
    created = questions.create_question("Title", "Body", author)

    with pytest.raises(PermissionDenied) as exc_info:
        questions.update_question(created.id, other_user, title="Hijacked")
    assert exc_info.value.action == "update"

    with pytest.raises(PermissionDenied) as exc_info:
        questions.delete_question(created.id, other_user)
    assert exc_info.value.action == "delete"

    assert questions.find_one(created.id).title == "Title"


def test_question_missing(questions, author):
    with pytest.raises(NotFound):
        questions.update_question(42, author, title="x")
    with pytest.raises(NotFound):
        questions.delete_question(42, author)
    with pytest.raises(NotFound):
        questions.find_one(42)


def test_update_reports_like_state_only_for_non_author(questions, likes, author, admin):
    created = questions.create_question("Title", "Body", author)
    likes.toggle(QuestionTarget(created.id), admin)

    by_admin = questions.update_question(created.id, admin, title="Admin edit")
    by_author = questions.update_question(created.id, author, title="Author edit")

    assert by_admin.is_liked is True
    assert by_author.is_liked is False
    assert by_author.like_count == 1


def test_read_paths_hydrate_is_liked(questions, likes, author, other_user, admin):
    first = questions.create_question("First", "Body", author)
    second = questions.create_question("Second", "Body", author)
    likes.toggle(QuestionTarget(second.id), other_user)

    liked = {q.id: q.is_liked for q in questions.find_all(other_user)}
    assert liked == {first.id: False, second.id: True}

    assert all(not q.is_liked for q in questions.find_all())
    assert all(not q.is_liked for q in questions.find_all(admin))
    assert questions.find_one(second.id, other_user).is_liked is True
    assert questions.find_one(second.id).like_count == 1


def test_create_answer_requires_question(answers, author):
    with pytest.raises(NotFound) as exc_info:
        answers.create_answer(404, "Orphan", author)
    assert exc_info.value.resource == "question"


def test_answer_ownership_gate(questions, answers, author, other_user, admin):
    question = questions.create_question("Title", "Body", author)
    answer = answers.create_answer(question.id, "Answer", other_user)

    # 问题作者不是回答作者
    with pytest.raises(PermissionDenied):
        answers.update_answer(answer.id, author, content="Edited")
    with pytest.raises(PermissionDenied):
        answers.delete_answer(answer.id, author)

    assert answers.update_answer(answer.id, other_user, content="Mine").content == "Mine"
    assert answers.update_answer(answer.id, admin, content="Moderated").content == "Moderated"
    answers.delete_answer(answer.id, admin)

    assert answers.find_all_by_question(question.id) == []


def test_update_answer_is_liked(questions, answers, likes, author, other_user, admin):
    question = questions.create_question("Title", "Body", author)
    answer = answers.create_answer(question.id, "Answer", other_user)
    likes.toggle(AnswerTarget(answer.id), admin)

    assert answers.update_answer(answer.id, admin, content="A").is_liked is True
    assert answers.update_answer(answer.id, other_user, content="B").is_liked is False


def test_answers_listed_per_question(questions, answers, likes, author, other_user):
    q1 = questions.create_question("One", "Body", author)
    q2 = questions.create_question("Two", "Body", author)
    a1 = answers.create_answer(q1.id, "first", other_user)
    a2 = answers.create_answer(q1.id, "second", other_user)
    answers.create_answer(q2.id, "elsewhere", other_user)
    likes.toggle(AnswerTarget(a2.id), author)

    listed = answers.find_all_by_question(q1.id, author)

    assert [a.id for a in listed] == [a1.id, a2.id]
    assert [a.is_liked for a in listed] == [False, True]
    assert isinstance(listed[0], AnswerRead)
    assert answers.find_one(a2.id).like_count == 1
    with pytest.raises(NotFound):
        answers.find_all_by_question(999)


def test_deleting_question_cascades(questions, answers, likes, author, other_user, admin):
    question = questions.create_question("Title", "Body", author)
    answer = answers.create_answer(question.id, "Answer", other_user)
    kept = questions.create_question("Kept", "Body", author)
    likes.toggle(QuestionTarget(question.id), other_user)
    likes.toggle(AnswerTarget(answer.id), author)
    likes.toggle(QuestionTarget(kept.id), other_user)

    questions.delete_question(question.id, admin)

    assert _count(Question) == 1
    assert _count(Answer) == 0
    with get_session() as session:
        remaining = session.exec(select(Like)).all()
    assert [like.question_id for like in remaining] == [kept.id]


def test_deleting_answer_removes_its_likes(questions, answers, likes, author, other_user):
    question = questions.create_question("Title", "Body", author)
    answer = answers.create_answer(question.id, "Answer", other_user)
    likes.toggle(AnswerTarget(answer.id), author)

    answers.delete_answer(answer.id, other_user)

    assert _count(Like) == 0
    assert _count(Question) == 1


def test_admin_deletes_user_and_their_data(auth_service, questions, answers, likes, author, other_user, admin):
    question = questions.create_question("Title", "Body", author)
    answers.create_answer(question.id, "Answer", other_user)
    other_question = questions.create_question("Other", "Body", other_user)
    likes.toggle(QuestionTarget(other_question.id), author)
    auth_service.login(author.email, "password123")

    users = UserService()
    with pytest.raises(PermissionDenied):
        users.delete_user(author.id, other_user)

    users.delete_user(author.id, admin)

    assert _count(Question) == 1
    assert _count(Answer) == 0
    assert _count(Like) == 0
    assert _count(SessionToken) == 0
    assert [u.id for u in users.list_users()] == [other_user.id, admin.id]
    with pytest.raises(NotFound):
        users.delete_user(author.id, admin)


def test_only_admin_changes_roles(author, other_user, admin):
    users = UserService()

    with pytest.raises(PermissionDenied):
        users.update_role(other_user.id, "admin", author)
    with pytest.raises(ForumError) as exc_info:
        users.update_role(admin.id, "user", admin)
    assert exc_info.value.detail == "cannot_modify_own_role"

    promoted = users.update_role(author.id, "admin", admin)

    assert promoted.role == "admin"
    assert users.get_user(author.id).is_admin
