"""Planning repository - Database operations for planning reference data"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Client, Employee, LeaveRecord, PlanningConfiguration, Project, Task

APPROVED = "approved"


class PlanningRepository:
    """Repository for planning database operations"""

    @staticmethod
    def get_configuration(db: Session) -> Optional[PlanningConfiguration]:
        """Get the studio planning configuration row, if any"""
        return db.query(PlanningConfiguration).order_by(PlanningConfiguration.id).first()

    @staticmethod
    def count_approved_leave(db: Session, employee_name: str, day: date) -> int:
        """Count approved leave records covering a day"""
        return (
            db.query(func.count(LeaveRecord.id))
            .filter(
                LeaveRecord.employee_name == employee_name,
                LeaveRecord.status == APPROVED,
                LeaveRecord.start_date <= day,
                LeaveRecord.end_date >= day,
            )
            .scalar()
        )

    @staticmethod
    def get_approved_leave(db: Session, employee_name: str, start: date, end: date) -> list[LeaveRecord]:
        """Get approved leave records overlapping a date range"""
        return (
            db.query(LeaveRecord)
            .filter(
                LeaveRecord.employee_name == employee_name,
                LeaveRecord.status == APPROVED,
                LeaveRecord.start_date <= end,
                LeaveRecord.end_date >= start,
            )
            .order_by(LeaveRecord.start_date)
            .all()
        )

    @staticmethod
    def find_employee(db: Session, name: str) -> Optional[Employee]:
        """Get an employee profile by exact name, falling back to a partial match"""
        employee = db.query(Employee).filter(Employee.name == name).first()
        if employee:
            return employee
        return db.query(Employee).filter(Employee.name.ilike(f"%{name}%")).order_by(Employee.id).first()

    @staticmethod
    def get_tasks_for_day(db: Session, employee_name: str, week_start: date, day_of_week: int) -> list[Task]:
        """Get committed tasks for one employee on one grid day"""
        return (
            db.query(Task)
            .filter(
                Task.employee_name == employee_name,
                Task.week_start == week_start,
                Task.day_of_week == day_of_week,
            )
            .order_by(Task.start_hour)
            .all()
        )

    @staticmethod
    def get_tasks_in_range(db: Session, employee_name: str, start: date, end: date) -> list[Task]:
        """Get committed tasks for weeks starting inside a date range"""
        return (
            db.query(Task)
            .filter(
                Task.employee_name == employee_name,
                Task.week_start >= start,
                Task.week_start <= end,
            )
            .order_by(Task.week_start, Task.day_of_week, Task.start_hour)
            .all()
        )

    # Client lookup
    @staticmethod
    def search_clients(db: Session, term: str, limit: int = 10) -> list[Client]:
        """Search clients by name or client number"""
        pattern = f"%{term}%"
        return (
            db.query(Client)
            .filter(Client.name.ilike(pattern) | Client.client_number.ilike(pattern))
            .order_by(Client.name)
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_all_clients(db: Session) -> list[Client]:
        return db.query(Client).order_by(Client.name).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    # Committing proposals
    @staticmethod
    def get_project_by_number(db: Session, project_number: str) -> Optional[Project]:
        return db.query(Project).filter(Project.project_number == project_number).first()

    @staticmethod
    def create_project_with_tasks(db: Session, task_rows: list[dict], **project_data) -> Project:
        """Create a project and its tasks in one transaction"""
        project = Project(**project_data)
        db.add(project)
        db.flush()
        for row in task_rows:
            db.add(Task(project_id=project.id, **row))
        db.commit()
        db.refresh(project)
        return project
