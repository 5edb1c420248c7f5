"""Project service for customer project tracking."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, or_, select

from app.auth.caller_context import CallerContext, enforce_ownership
from app.core.exceptions import NotFoundError, ValidationError
from app.models.customer import Customer
from app.models.enums import ProjectStatus
from app.models.project import Project
from app.models.project_update import ProjectUpdate
from app.models.user import User
from app.services.base_service import BaseService
from app.utils.validators import like_pattern, sanitize_text

ACTIVE_PROJECT_STATUSES = (ProjectStatus.PENDING, ProjectStatus.IN_PROGRESS)


class ProjectService(BaseService):
    """Service for project CRUD and progress updates."""

    def create_project(
        self,
        customer_id: str,
        title: str,
        description: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> Project:
        if self.db.get(Customer, customer_id) is None:
            raise NotFoundError("Customer not found")
        clean_title = sanitize_text(title, max_len=255)
        if not clean_title:
            raise ValidationError("Title is required", field="title")
        project = Project(
            customer_id=customer_id,
            title=clean_title,
            description=sanitize_text(description) or None,
            status=ProjectStatus.PENDING,
            progress=0,
            start_date=start_date,
            end_date=end_date,
        )
        self.db.add(project)
        self.commit()
        self.db.refresh(project)
        return project

    def get_project(self, project_id: str) -> Project | None:
        return self.db.get(Project, project_id)

    def require_project(self, project_id: str) -> Project:
        project = self.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    def list_for_customer(self, customer_id: str, limit: int | None = None) -> list[Project]:
        stmt = (
            select(Project)
            .where(Project.customer_id == customer_id)
            .order_by(Project.updated_at.desc(), Project.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def list_projects(
        self,
        search: str | None = None,
        status: ProjectStatus | None = None,
        customer_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Project]:
        """Admin listing across customers, newest first."""
        stmt = select(Project).join(Project.customer).join(Customer.user)
        if search:
            pattern = like_pattern(search)
            stmt = stmt.where(
                or_(
                    Project.title.ilike(pattern, escape="\\"),
                    Project.description.ilike(pattern, escape="\\"),
                    Customer.company_name.ilike(pattern, escape="\\"),
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            )
        if status is not None:
            stmt = stmt.where(Project.status == status)
        if customer_id:
            stmt = stmt.where(Project.customer_id == customer_id)
        stmt = stmt.order_by(Project.created_at.desc(), Project.id).limit(limit).offset(offset)
        return list(self.db.scalars(stmt))

    def count_active(self, customer_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Project)
            .where(Project.customer_id == customer_id, Project.status.in_(ACTIVE_PROJECT_STATUSES))
        )
        return int(self.db.scalar(stmt) or 0)

    def update_progress(
        self,
        project_id: str,
        progress: int,
        status: ProjectStatus | None = None,
        update_title: str | None = None,
        update_content: str | None = None,
    ) -> Project:
        """Set progress and optionally post an update note.

        An explicit ``status`` wins; otherwise progress drives it. The note is
        recorded only when both its title and content are given.
        """
        if not 0 <= progress <= 100:
            raise ValidationError("Progress must be between 0 and 100", field="progress")
        project = self.require_project(project_id)

        project.progress = progress
        if status is not None:
            project.status = ProjectStatus(status)
        elif progress == 100:
            project.status = ProjectStatus.COMPLETED
        elif progress > 0 and project.status is ProjectStatus.PENDING:
            project.status = ProjectStatus.IN_PROGRESS

        title = sanitize_text(update_title, max_len=255)
        content = sanitize_text(update_content)
        if title and content:
            self.db.add(ProjectUpdate(project_id=project.id, title=title, content=content, progress=progress))
        self.commit()
        self.db.refresh(project)
        return project

    def list_updates(self, project_id: str, caller: CallerContext) -> list[ProjectUpdate]:
        """Updates for a project the caller may see, newest first."""
        project = self.require_project(project_id)
        enforce_ownership(project.customer_id, caller, label="Project")
        stmt = (
            select(ProjectUpdate)
            .where(ProjectUpdate.project_id == project.id)
            .order_by(ProjectUpdate.created_at.desc(), ProjectUpdate.id)
        )
        return list(self.db.scalars(stmt))
