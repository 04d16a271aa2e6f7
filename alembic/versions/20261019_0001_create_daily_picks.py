# mypy: ignore-errors
"""
Migration Alembic pour créer la table daily_picks.

Une ligne par (date, kind): la contrainte d'unicité est ce qui rend le tick horaire idempotent
même lorsque deux workers s'exécutent en même temps.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Crée la table daily_picks et sa contrainte d'unicité (date, kind)."""
    op.create_table(
        "daily_picks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("catalog_id", sa.String(length=128), nullable=False),
        sa.Column("chosen_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("date", "kind", name="uq_daily_picks_date_kind"),
    )


def downgrade() -> None:
    op.drop_table("daily_picks")
