"""baseline schema for users, leads, customers, projects, contracts and audit log

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLE = sa.Enum("ADMIN", "CUSTOMER", name="user_role")
LEAD_STATUS = sa.Enum(
    "NEW", "CONTACTED", "MEETING_SCHEDULED", "MEETING_COMPLETED", "CONVERTED", "CLOSED", name="lead_status"
)
PROJECT_TYPE = sa.Enum("AI_AUTOMATION", "BRAND_IDENTITY", "WEB_MOBILE", "FULL_PRODUCT", name="project_type")
BUDGET = sa.Enum("RANGE_5K_10K", "RANGE_10K_25K", "RANGE_25K_50K", "RANGE_50K_PLUS", name="budget")
PROJECT_STATUS = sa.Enum("PENDING", "IN_PROGRESS", "ON_HOLD", "COMPLETED", "CANCELLED", name="project_status")
CONTRACT_STATUS = sa.Enum("DRAFT", "SENT", "VIEWED", "SIGNED", "EXPIRED", name="contract_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", USER_ROLE, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "leads",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("project_type", PROJECT_TYPE, nullable=True),
        sa.Column("budget", BUDGET, nullable=True),
        sa.Column("survey_data", sa.JSON(), nullable=True),
        sa.Column("current_step", sa.Integer(), nullable=False),
        sa.Column("status", LEAD_STATUS, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_leads_status", "leads", ["status"])

    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", PROJECT_STATUS, nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_projects_progress_range"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_customer_status", "projects", ["customer_id", "status"])

    op.create_table(
        "contracts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("file_url", sa.String(length=2048), nullable=False),
        sa.Column("status", CONTRACT_STATUS, nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("signer_name", sa.String(length=100), nullable=True),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signature_ref", sa.String(length=255), nullable=True),
        sa.Column("signature_hash", sa.String(length=64), nullable=True),
        sa.Column("signer_ip", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_contracts_customer_status", "contracts", ["customer_id", "status"])

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(length=120), nullable=False),
        sa.Column("entity", sa.String(length=120), nullable=False),
        sa.Column("entity_id", sa.String(length=36), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_log_entity", "audit_log", ["entity", "entity_id"])
    op.create_index("idx_audit_log_created_at", "audit_log", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_audit_log_created_at", table_name="audit_log")
    op.drop_index("idx_audit_log_entity", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("idx_contracts_customer_status", table_name="contracts")
    op.drop_table("contracts")
    op.drop_index("idx_projects_customer_status", table_name="projects")
    op.drop_table("projects")
    op.drop_table("customers")
    op.drop_index("idx_leads_status", table_name="leads")
    op.drop_table("leads")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (CONTRACT_STATUS, PROJECT_STATUS, BUDGET, PROJECT_TYPE, LEAD_STATUS, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)
