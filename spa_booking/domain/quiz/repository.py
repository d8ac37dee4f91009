"""Skin quiz repositories"""

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Answer, Question, RoadmapStep, Scoreband, UserQuiz
from ...shared.repository import CRUDRepository


class AnswerRepository(CRUDRepository[Answer]):
    model = Answer
    entity_name = "Answer"

    def get_many(self, db: Session, answer_ids: list[str]) -> list[Answer]:
        return db.query(Answer).filter(Answer.id.in_(answer_ids)).all()


class QuestionRepository(CRUDRepository[Question]):
    model = Question
    entity_name = "Question"

    def populate_options(self) -> list:
        return [selectinload(Question.answers)]


class ScorebandRepository(CRUDRepository[Scoreband]):
    model = Scoreband
    entity_name = "Scoreband"

    def populate_options(self) -> list:
        return [selectinload(Scoreband.roadmap).joinedload(RoadmapStep.service)]

    def list_all(self, db: Session, *criteria, order_by=None) -> list[Scoreband]:
        if order_by is None:
            order_by = Scoreband.min_point
        return super().list_all(db, *criteria, order_by=order_by)


class UserQuizRepository(CRUDRepository[UserQuiz]):
    model = UserQuiz
    entity_name = "User quiz"

    def populate_options(self) -> list:
        return [joinedload(UserQuiz.scoreband), selectinload(UserQuiz.question_result)]

    def list_by_account(self, db: Session, account_id: str) -> list[UserQuiz]:
        return self.list_all(db, UserQuiz.account_id == account_id)
