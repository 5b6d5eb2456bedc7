import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    primary_role = Column(String(100), nullable=True)
    discipline = Column(String(100), nullable=True)
    weekly_hours = Column(Float, nullable=True)
    # Recurring non-working weekday for part-timers, e.g. "friday" or "vrijdag"
    part_time_day = Column(String(20), nullable=True)
    available = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(String(36), unique=True, index=True, default=generate_public_id)
    client_number = Column(String(50), unique=True, nullable=True)
    name = Column(String(255), index=True, nullable=False)
    contact_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    # Free-text instructions shown alongside every planning proposal for this client
    planning_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    projects = relationship("Project", back_populates="client", cascade="all, delete-orphan")


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    project_number = Column(String(50), unique=True, index=True, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    description = Column(String(500), nullable=False)
    project_type = Column(String(50), default="general", nullable=False)
    deadline = Column(Date, nullable=True)
    status = Column(String(50), default="concept", nullable=False)  # concept, active, completed
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client", back_populates="projects")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")


class LeaveRecord(Base):
    __tablename__ = "leave_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_name = Column(String(255), index=True, nullable=False)
    type = Column(String(50), default="leave", nullable=False)  # leave, sick, training, ...
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=True)
    # Only "approved" records block planning
    status = Column(String(50), default="pending", nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Task(Base):
    """One committed block in the weekly grid"""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    employee_name = Column(String(255), index=True, nullable=False)
    phase_name = Column(String(255), nullable=True)
    discipline = Column(String(100), nullable=True)
    work_type = Column(String(255), nullable=True)
    week_start = Column(Date, index=True, nullable=False)  # Monday of the week
    day_of_week = Column(Integer, nullable=False)  # 0=Monday .. 4=Friday
    start_hour = Column(Float, nullable=False)  # decimal hours, 9.5 = 09:30
    duration_hours = Column(Float, nullable=False)
    plan_status = Column(String(50), default="concept", nullable=False)
    is_hard_lock = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="tasks")


class PlanningConfiguration(Base):
    """Single-row table with studio-wide planning rules"""

    __tablename__ = "planning_configuration"

    id = Column(Integer, primary_key=True, index=True)
    workday_start = Column(Float, nullable=True)
    workday_end = Column(Float, nullable=True)
    lunch_start = Column(Float, nullable=True)
    lunch_end = Column(Float, nullable=True)
    meeting_start = Column(Float, nullable=True)
    meeting_end = Column(Float, nullable=True)
    standard_hours_per_day = Column(Float, nullable=True)
    min_buffer_between_phases = Column(Integer, nullable=True)
    phase_templates = Column(JSON, nullable=True)
    extra_instructions = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
