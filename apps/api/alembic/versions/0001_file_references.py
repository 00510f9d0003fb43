"""Create stored_files and file_references

Revision ID: 0001_file_references
Revises:
Create Date: 2026-10-19

stored_files holds the storage layer's file objects; file_references links
them to fields of records in other tables, ordered by sorting.
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_file_references"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "stored_files",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("storage_pid", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("storage_key", sa.String(512), nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )
    op.create_index("idx_stored_files_storage_pid", "stored_files", ["storage_pid"])

    op.create_table(
        "file_references",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("storage_pid", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "file_id",
            sa.Integer(),
            sa.ForeignKey("stored_files.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("table_name", sa.String(255), nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=False),
        sa.Column("field_name", sa.String(100), nullable=False),
        sa.Column("sorting", sa.Integer(), server_default=sa.text("0"), nullable=False),
    )
    op.create_index(
        "idx_file_references_target",
        "file_references",
        ["table_name", "record_id", "field_name"],
    )
    op.create_index("idx_file_references_file", "file_references", ["file_id"])


def downgrade():
    op.drop_index("idx_file_references_file", table_name="file_references")
    op.drop_index("idx_file_references_target", table_name="file_references")
    op.drop_table("file_references")
    op.drop_index("idx_stored_files_storage_pid", table_name="stored_files")
    op.drop_table("stored_files")
