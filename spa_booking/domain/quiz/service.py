"""Skin quiz business logic"""

import logging

from sqlalchemy.orm import Session

from ...auth import Identity
from ...enums import RoleEnum
from ...errors import BadRequestError, ForbiddenError, NotFoundError
from ...models import Answer, Question, QuestionResult, RoadmapStep, Scoreband, Service, UserQuiz
from ...shared.repository import ensure_exists
from .repository import AnswerRepository, QuestionRepository, ScorebandRepository, UserQuizRepository
from .schemas import (
    AnswerCreate,
    AnswerUpdate,
    QuestionCreate,
    QuestionResultIn,
    QuestionUpdate,
    RoadmapStepIn,
    ScorebandCreate,
    ScorebandUpdate,
    UserQuizCreate,
    UserQuizUpdate,
)

logger = logging.getLogger(__name__)

STAFF_ROLES = {RoleEnum.STAFF, RoleEnum.ADMIN}


class AnswerService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AnswerRepository()

    def list_answers(self) -> list[Answer]:
        answers = self.repo.list_all(self.db)
        if not answers:
            raise NotFoundError("No answers found")
        return answers

    def get_answer(self, answer_id: str) -> Answer:
        answer = self.repo.get(self.db, answer_id)
        if not answer:
            raise NotFoundError("Answer not found")
        return answer

    def create_answer(self, data: AnswerCreate) -> Answer:
        return self.repo.create(self.db, **data.model_dump())

    def update_answer(self, answer_id: str, data: AnswerUpdate) -> Answer:
        answer = self.get_answer(answer_id)
        return self.repo.update(self.db, answer, **data.model_dump(exclude_unset=True))

    def delete_answer(self, answer_id: str) -> dict:
        answer = self.get_answer(answer_id)
        self.repo.delete(self.db, answer)
        logger.info(f"🗑️ Answer {answer_id} deleted")
        return {"message": "Answer deleted successfully"}


class QuestionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = QuestionRepository()
        self.answer_repo = AnswerRepository()

    def list_questions(self) -> list[Question]:
        questions = self.repo.list_all(self.db)
        if not questions:
            raise NotFoundError("No questions found")
        return questions

    def get_question(self, question_id: str) -> Question:
        question = self.repo.get(self.db, question_id)
        if not question:
            raise NotFoundError("Question not found")
        return question

    def _load_answers(self, answer_ids: list[str]) -> list[Answer]:
        unique_ids = list(dict.fromkeys(answer_ids))
        answers = self.answer_repo.get_many(self.db, unique_ids)
        if len(answers) != len(unique_ids):
            raise NotFoundError("Answer not found")
        by_id = {a.id: a for a in answers}
        return [by_id[answer_id] for answer_id in unique_ids]

    def create_question(self, data: QuestionCreate) -> Question:
        question = Question(question=data.question, answers=self._load_answers(data.answer_id))
        question = self.repo.add(self.db, question)
        logger.info(f"🆕 Question {question.id} created with {len(question.answers)} answers")
        return question

    def update_question(self, question_id: str, data: QuestionUpdate) -> Question:
        question = self.get_question(question_id)
        updates = {"question": data.question}
        if data.answer_id is not None:
            updates["answers"] = self._load_answers(data.answer_id)
        return self.repo.update(self.db, question, **updates)

    def delete_question(self, question_id: str) -> dict:
        question = self.get_question(question_id)
        self.repo.delete(self.db, question)
        logger.info(f"🗑️ Question {question_id} deleted")
        return {"message": "Question deleted successfully"}


class ScorebandService:
    """Score ranges mapping a quiz total to a skin type and treatment roadmap"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScorebandRepository()

    def list_scorebands(self) -> list[Scoreband]:
        scorebands = self.repo.list_all(self.db)
        if not scorebands:
            raise NotFoundError("No scorebands found")
        return scorebands

    def get_scoreband(self, scoreband_id: str) -> Scoreband:
        scoreband = self.repo.get(self.db, scoreband_id)
        if not scoreband:
            raise NotFoundError("Scoreband not found")
        return scoreband

    def _build_roadmap(self, steps: list[RoadmapStepIn]) -> list[RoadmapStep]:
        roadmap = []
        for position, step in enumerate(steps):
            ensure_exists(self.db, Service, step.service_id, "Service")
            roadmap.append(
                RoadmapStep(position=position, service_id=step.service_id, estimate=step.estimate)
            )
        return roadmap

    def create_scoreband(self, data: ScorebandCreate) -> Scoreband:
        scoreband = Scoreband(
            **data.model_dump(exclude={"roadmap"}),
            roadmap=self._build_roadmap(data.roadmap),
        )
        scoreband = self.repo.add(self.db, scoreband)
        logger.info(
            f"🆕 Scoreband {scoreband.id} [{scoreband.min_point}, {scoreband.max_point}] "
            f"for {scoreband.type_of_skin}"
        )
        return scoreband

    def update_scoreband(self, scoreband_id: str, data: ScorebandUpdate) -> Scoreband:
        scoreband = self.get_scoreband(scoreband_id)

        min_point = data.min_point if data.min_point is not None else scoreband.min_point
        max_point = data.max_point if data.max_point is not None else scoreband.max_point
        if min_point > max_point:
            raise BadRequestError("minPoint must not exceed maxPoint")

        updates = data.model_dump(exclude_unset=True, exclude={"roadmap"})
        if data.roadmap is not None:
            updates["roadmap"] = self._build_roadmap(data.roadmap)
        return self.repo.update(self.db, scoreband, **updates)

    def delete_scoreband(self, scoreband_id: str) -> dict:
        scoreband = self.get_scoreband(scoreband_id)
        self.repo.delete(self.db, scoreband)
        logger.info(f"🗑️ Scoreband {scoreband_id} deleted")
        return {"message": "Scoreband deleted successfully"}


class UserQuizService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserQuizRepository()
        self.question_repo = QuestionRepository()

    def list_user_quizzes(self) -> list[UserQuiz]:
        quizzes = self.repo.list_all(self.db)
        if not quizzes:
            raise NotFoundError("No user quizzes found")
        return quizzes

    def list_by_account(self, account_id: str) -> list[UserQuiz]:
        quizzes = self.repo.list_by_account(self.db, account_id)
        if not quizzes:
            raise NotFoundError("No user quizzes found for this account")
        return quizzes

    def get_user_quiz(self, user_quiz_id: str) -> UserQuiz:
        quiz = self.repo.get(self.db, user_quiz_id)
        if not quiz:
            raise NotFoundError("User quiz not found")
        return quiz

    def _build_results(self, results: list[QuestionResultIn]) -> list[QuestionResult]:
        """Check every answer was offered by its question and keep submission order"""
        rows = []
        for position, result in enumerate(results):
            question = self.question_repo.get(self.db, result.question_id)
            if question is None:
                raise NotFoundError("Question not found")
            offered = {answer.id for answer in question.answers}
            for answer_id in result.answer_id:
                if answer_id not in offered:
                    raise BadRequestError(
                        f"Answer {answer_id} does not belong to question {question.id}"
                    )
            rows.append(
                QuestionResult(
                    position=position,
                    question_id=result.question_id,
                    answer_id=list(result.answer_id),
                )
            )
        return rows

    def _check_owner(self, quiz: UserQuiz, identity: Identity) -> None:
        if identity.role not in STAFF_ROLES and quiz.account_id != identity.account_id:
            raise ForbiddenError("You can only modify your own quiz results")

    def create_user_quiz(self, data: UserQuizCreate, identity: Identity) -> UserQuiz:
        ensure_exists(self.db, Scoreband, data.score_band_id, "Scoreband")
        quiz = UserQuiz(
            account_id=identity.account_id,
            score_band_id=data.score_band_id,
            total_point=data.total_point,
            question_result=self._build_results(data.question_result),
        )
        quiz = self.repo.add(self.db, quiz)
        logger.info(
            f"🧪 Quiz {quiz.id} submitted by {identity.account_id} "
            f"(total {quiz.total_point}, band {quiz.score_band_id})"
        )
        return quiz

    def update_user_quiz(
        self, user_quiz_id: str, data: UserQuizUpdate, identity: Identity
    ) -> UserQuiz:
        quiz = self.get_user_quiz(user_quiz_id)
        self._check_owner(quiz, identity)
        ensure_exists(self.db, Scoreband, data.score_band_id, "Scoreband")

        updates = data.model_dump(exclude_unset=True, exclude={"question_result"})
        if data.question_result is not None:
            updates["question_result"] = self._build_results(data.question_result)
        return self.repo.update(self.db, quiz, **updates)

    def delete_user_quiz(self, user_quiz_id: str, identity: Identity) -> dict:
        quiz = self.get_user_quiz(user_quiz_id)
        self._check_owner(quiz, identity)
        self.repo.delete(self.db, quiz)
        logger.info(f"🗑️ User quiz {user_quiz_id} deleted")
        return {"message": "User quiz deleted successfully"}
