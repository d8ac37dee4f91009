import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .enums import AppointmentStatusEnum, BlogStatusEnum, RoleEnum, TransactionStatusEnum


def generate_id():
    """Generate the string identifier used as primary key for every entity"""
    return str(uuid.uuid4())


def _enum(enum_cls, name: str):
    # Persist the enum value ("In Progress"), not the member name
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


therapist_specializations = Table(
    "therapist_specializations",
    Base.metadata,
    Column("therapist_id", String(36), ForeignKey("therapists.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", String(36), ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
)

question_answers = Table(
    "question_answers",
    Base.metadata,
    Column("question_id", String(36), ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    Column("answer_id", String(36), ForeignKey("answers.id", ondelete="CASCADE"), primary_key=True),
)


class Account(TimestampMixin, Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(_enum(RoleEnum, "account_role"), default=RoleEnum.CUSTOMER, nullable=False)
    avatar = Column(String(500), default="", nullable=False)
    dob = Column(Date, nullable=False)
    phone = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    therapist = relationship("Therapist", back_populates="account", uselist=False)


class Service(TimestampMixin, Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    service_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    images = Column(String(500), nullable=True)


class Therapist(TimestampMixin, Base):
    __tablename__ = "therapists"

    id = Column(String(36), primary_key=True, default=generate_id)
    account_id = Column(String(36), ForeignKey("accounts.id"), unique=True, nullable=False)
    # [{"name", "issuedBy", "issuedDate"}]
    certification = Column(JSON, default=list, nullable=False)
    experience = Column(String(255), nullable=False)

    account = relationship("Account", back_populates="therapist")
    specialization = relationship("Service", secondary=therapist_specializations)


class Slot(TimestampMixin, Base):
    __tablename__ = "slots"

    id = Column(String(36), primary_key=True, default=generate_id)
    slot_num = Column(Integer, unique=True, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)


class Appointment(TimestampMixin, Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    therapist_id = Column(String(36), ForeignKey("therapists.id"), index=True, nullable=False)
    customer_id = Column(String(36), ForeignKey("accounts.id"), index=True, nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    slots_id = Column(String(36), ForeignKey("slots.id"), nullable=False)
    check_in_image = Column(String(500), nullable=True)
    check_out_image = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    amount = Column(Float, nullable=True)
    status = Column(
        _enum(AppointmentStatusEnum, "appointment_status"),
        default=AppointmentStatusEnum.SCHEDULED,
        nullable=False,
    )

    therapist = relationship("Therapist")
    customer = relationship("Account")
    service = relationship("Service")
    slot = relationship("Slot")


class Shift(TimestampMixin, Base):
    __tablename__ = "shifts"
    __table_args__ = (
        UniqueConstraint("therapist_id", "date", "slots_id", name="uq_shift_therapist_date_slot"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    slots_id = Column(String(36), ForeignKey("slots.id"), nullable=False)
    appointment_id = Column(
        String(36), ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True
    )
    therapist_id = Column(String(36), ForeignKey("therapists.id"), index=True, nullable=False)
    date = Column(Date, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)

    slot = relationship("Slot")
    therapist = relationship("Therapist")
    appointment = relationship("Appointment")


class WorkSchedule(TimestampMixin, Base):
    __tablename__ = "work_schedules"
    __table_args__ = (
        UniqueConstraint("therapist_id", "date", name="uq_work_schedule_therapist_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    therapist_id = Column(String(36), ForeignKey("therapists.id"), index=True, nullable=False)
    date = Column(Date, nullable=False)
    # [{"slotsId", "appointmentId", "isAvailable"}]
    shift = Column(JSON, default=list, nullable=False)

    therapist = relationship("Therapist")


class PaymentMethod(TimestampMixin, Base):
    __tablename__ = "payment_methods"

    id = Column(String(36), primary_key=True, default=generate_id)
    method = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class Transaction(TimestampMixin, Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_id = Column(String(36), ForeignKey("accounts.id"), index=True, nullable=False)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=False)
    payment_method_id = Column(String(36), ForeignKey("payment_methods.id"), nullable=False)
    status = Column(_enum(TransactionStatusEnum, "transaction_status"), nullable=False)

    customer = relationship("Account")
    appointment = relationship("Appointment")
    payment_method = relationship("PaymentMethod")


class Feedback(TimestampMixin, Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=generate_id)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), index=True, nullable=False)
    therapist_id = Column(String(36), ForeignKey("therapists.id"), index=True, nullable=False)
    images = Column(String(500), nullable=True)
    comment = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)

    account = relationship("Account")
    appointment = relationship("Appointment")
    service = relationship("Service")
    therapist = relationship("Therapist")


class Blog(TimestampMixin, Base):
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=generate_id)
    staff_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    title = Column(String(255), nullable=False)
    status = Column(_enum(BlogStatusEnum, "blog_status"), default=BlogStatusEnum.DRAFT, nullable=False)
    # [{"content", "image", "imageDescription"}]
    content = Column(JSON, default=list, nullable=False)

    staff = relationship("Account")


class Answer(TimestampMixin, Base):
    __tablename__ = "answers"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    image = Column(String(500), nullable=False)
    point = Column(Float, nullable=False)


class Question(TimestampMixin, Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=generate_id)
    question = Column(Text, nullable=False)

    answers = relationship("Answer", secondary=question_answers)


class Scoreband(TimestampMixin, Base):
    __tablename__ = "scorebands"

    id = Column(String(36), primary_key=True, default=generate_id)
    min_point = Column(Float, nullable=False)
    max_point = Column(Float, nullable=False)
    type_of_skin = Column(String(255), nullable=False)
    skin_explanation = Column(Text, nullable=False)

    roadmap = relationship(
        "RoadmapStep",
        order_by="RoadmapStep.position",
        cascade="all, delete-orphan",
        back_populates="scoreband",
    )


class RoadmapStep(Base):
    __tablename__ = "roadmap_steps"

    id = Column(String(36), primary_key=True, default=generate_id)
    scoreband_id = Column(String(36), ForeignKey("scorebands.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    estimate = Column(String(255), nullable=False)

    scoreband = relationship("Scoreband", back_populates="roadmap")
    service = relationship("Service")


class UserQuiz(TimestampMixin, Base):
    __tablename__ = "user_quizzes"

    id = Column(String(36), primary_key=True, default=generate_id)
    account_id = Column(String(36), ForeignKey("accounts.id"), index=True, nullable=False)
    score_band_id = Column(String(36), ForeignKey("scorebands.id"), nullable=False)
    total_point = Column(Float, nullable=False)

    account = relationship("Account")
    scoreband = relationship("Scoreband")
    question_result = relationship(
        "QuestionResult",
        order_by="QuestionResult.position",
        cascade="all, delete-orphan",
        back_populates="user_quiz",
    )


class QuestionResult(Base):
    __tablename__ = "question_results"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_quiz_id = Column(String(36), ForeignKey("user_quizzes.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    question_id = Column(String(36), ForeignKey("questions.id"), nullable=False)
    # selected answer ids
    answer_id = Column(JSON, default=list, nullable=False)

    user_quiz = relationship("UserQuiz", back_populates="question_result")
