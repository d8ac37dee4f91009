"""Skin quiz routers"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_staff
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import (
    AnswerCreate,
    AnswerResponse,
    AnswerUpdate,
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
    ScorebandCreate,
    ScorebandResponse,
    ScorebandUpdate,
    UserQuizCreate,
    UserQuizResponse,
    UserQuizUpdate,
)
from .service import AnswerService, QuestionService, ScorebandService, UserQuizService

answers_router = APIRouter(prefix="/answer", tags=["Quiz"])
questions_router = APIRouter(prefix="/question", tags=["Quiz"])
scorebands_router = APIRouter(prefix="/scoreband", tags=["Quiz"])
user_quiz_router = APIRouter(prefix="/user-quiz", tags=["Quiz"])


def get_answer_service(db: Session = Depends(get_db)) -> AnswerService:
    return AnswerService(db)


def get_question_service(db: Session = Depends(get_db)) -> QuestionService:
    return QuestionService(db)


def get_scoreband_service(db: Session = Depends(get_db)) -> ScorebandService:
    return ScorebandService(db)


def get_user_quiz_service(db: Session = Depends(get_db)) -> UserQuizService:
    return UserQuizService(db)


# ============================================================================
# ANSWERS
# ============================================================================


@answers_router.get("", response_model=list[AnswerResponse])
async def get_all_answers(service: AnswerService = Depends(get_answer_service)):
    return [AnswerResponse.model_validate(a) for a in service.list_answers()]


@answers_router.post("", response_model=AnswerResponse, status_code=201)
async def create_answer(
    data: AnswerCreate,
    _staff: Identity = Depends(require_staff),
    service: AnswerService = Depends(get_answer_service),
):
    return AnswerResponse.model_validate(service.create_answer(data))


@answers_router.get("/{answer_id}", response_model=AnswerResponse)
async def get_answer(answer_id: str, service: AnswerService = Depends(get_answer_service)):
    return AnswerResponse.model_validate(service.get_answer(answer_id))


@answers_router.put("/{answer_id}", response_model=AnswerResponse)
async def update_answer(
    answer_id: str,
    data: AnswerUpdate,
    _staff: Identity = Depends(require_staff),
    service: AnswerService = Depends(get_answer_service),
):
    return AnswerResponse.model_validate(service.update_answer(answer_id, data))


@answers_router.delete("/{answer_id}", response_model=MessageResponse)
async def delete_answer(
    answer_id: str,
    _staff: Identity = Depends(require_staff),
    service: AnswerService = Depends(get_answer_service),
):
    return service.delete_answer(answer_id)


# ============================================================================
# QUESTIONS
# ============================================================================


@questions_router.get("", response_model=list[QuestionResponse])
async def get_all_questions(service: QuestionService = Depends(get_question_service)):
    return [QuestionResponse.model_validate(q) for q in service.list_questions()]


@questions_router.post("", response_model=QuestionResponse, status_code=201)
async def create_question(
    data: QuestionCreate,
    _staff: Identity = Depends(require_staff),
    service: QuestionService = Depends(get_question_service),
):
    return QuestionResponse.model_validate(service.create_question(data))


@questions_router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    return QuestionResponse.model_validate(service.get_question(question_id))


@questions_router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    data: QuestionUpdate,
    _staff: Identity = Depends(require_staff),
    service: QuestionService = Depends(get_question_service),
):
    return QuestionResponse.model_validate(service.update_question(question_id, data))


@questions_router.delete("/{question_id}", response_model=MessageResponse)
async def delete_question(
    question_id: str,
    _staff: Identity = Depends(require_staff),
    service: QuestionService = Depends(get_question_service),
):
    return service.delete_question(question_id)


# ============================================================================
# SCORE BANDS
# ============================================================================


@scorebands_router.get("", response_model=list[ScorebandResponse])
async def get_all_scorebands(service: ScorebandService = Depends(get_scoreband_service)):
    return [ScorebandResponse.model_validate(s) for s in service.list_scorebands()]


@scorebands_router.post("", response_model=ScorebandResponse, status_code=201)
async def create_scoreband(
    data: ScorebandCreate,
    _staff: Identity = Depends(require_staff),
    service: ScorebandService = Depends(get_scoreband_service),
):
    return ScorebandResponse.model_validate(service.create_scoreband(data))


@scorebands_router.get("/{scoreband_id}", response_model=ScorebandResponse)
async def get_scoreband(
    scoreband_id: str, service: ScorebandService = Depends(get_scoreband_service)
):
    return ScorebandResponse.model_validate(service.get_scoreband(scoreband_id))


@scorebands_router.put("/{scoreband_id}", response_model=ScorebandResponse)
async def update_scoreband(
    scoreband_id: str,
    data: ScorebandUpdate,
    _staff: Identity = Depends(require_staff),
    service: ScorebandService = Depends(get_scoreband_service),
):
    return ScorebandResponse.model_validate(service.update_scoreband(scoreband_id, data))


@scorebands_router.delete("/{scoreband_id}", response_model=MessageResponse)
async def delete_scoreband(
    scoreband_id: str,
    _staff: Identity = Depends(require_staff),
    service: ScorebandService = Depends(get_scoreband_service),
):
    return service.delete_scoreband(scoreband_id)


# ============================================================================
# USER QUIZZES
# ============================================================================


@user_quiz_router.get("", response_model=list[UserQuizResponse])
async def get_all_user_quizzes(service: UserQuizService = Depends(get_user_quiz_service)):
    return [UserQuizResponse.model_validate(q) for q in service.list_user_quizzes()]


@user_quiz_router.post("", response_model=UserQuizResponse, status_code=201)
async def create_user_quiz(
    data: UserQuizCreate,
    identity: Identity = Depends(get_current_identity),
    service: UserQuizService = Depends(get_user_quiz_service),
):
    """Store a submitted quiz for the calling account"""
    return UserQuizResponse.model_validate(service.create_user_quiz(data, identity))


@user_quiz_router.get("/account/{account_id}", response_model=list[UserQuizResponse])
async def get_user_quizzes_by_account(
    account_id: str, service: UserQuizService = Depends(get_user_quiz_service)
):
    return [UserQuizResponse.model_validate(q) for q in service.list_by_account(account_id)]


@user_quiz_router.get("/{user_quiz_id}", response_model=UserQuizResponse)
async def get_user_quiz(
    user_quiz_id: str, service: UserQuizService = Depends(get_user_quiz_service)
):
    return UserQuizResponse.model_validate(service.get_user_quiz(user_quiz_id))


@user_quiz_router.put("/{user_quiz_id}", response_model=UserQuizResponse)
async def update_user_quiz(
    user_quiz_id: str,
    data: UserQuizUpdate,
    identity: Identity = Depends(get_current_identity),
    service: UserQuizService = Depends(get_user_quiz_service),
):
    return UserQuizResponse.model_validate(service.update_user_quiz(user_quiz_id, data, identity))


@user_quiz_router.delete("/{user_quiz_id}", response_model=MessageResponse)
async def delete_user_quiz(
    user_quiz_id: str,
    identity: Identity = Depends(get_current_identity),
    service: UserQuizService = Depends(get_user_quiz_service),
):
    return service.delete_user_quiz(user_quiz_id, identity)
