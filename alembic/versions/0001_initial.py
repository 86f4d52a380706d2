"""Tables client, product, commande et order_detail

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "client",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nom", sa.String(), nullable=False),
        sa.Column("prenom", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("mot_de_passe", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("adresse", sa.String(), nullable=False, server_default=""),
        sa.Column("telephone", sa.String(), nullable=False, server_default=""),
    )
    op.create_index("ix_client_id", "client", ["id"])
    op.create_index("ix_client_email", "client", ["email"], unique=True)

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nom", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("prix", sa.DECIMAL(10, 2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.String(), nullable=False, server_default=""),
        sa.Column("categorie_id", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("stock >= 0", name="check_product_stock_positive"),
        sa.CheckConstraint("prix >= 0", name="check_product_prix_positive"),
    )
    op.create_index("ix_product_id", "product", ["id"])

    op.create_table(
        "commande",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client.id"), nullable=False),
        sa.Column("date_commande", sa.DateTime(timezone=True), nullable=False),
        sa.Column("statut", sa.String(), nullable=False),
        sa.Column("total", sa.DECIMAL(10, 2), nullable=False, server_default="0"),
    )
    op.create_index("ix_commande_id", "commande", ["id"])
    op.create_index("ix_commande_client_id", "commande", ["client_id"])
    op.create_index("ix_commande_date_commande", "commande", ["date_commande"])

    op.create_table(
        "order_detail",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "commande_id", sa.Integer(),
            sa.ForeignKey("commande.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "produit_id", sa.Integer(),
            sa.ForeignKey("product.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("quantite", sa.Integer(), nullable=False),
        sa.Column("prix_unitaire", sa.DECIMAL(10, 2), nullable=False),
        sa.CheckConstraint("quantite > 0", name="check_order_detail_quantite_positive"),
    )
    op.create_index("ix_order_detail_id", "order_detail", ["id"])
    op.create_index("ix_order_detail_commande_id", "order_detail", ["commande_id"])
    op.create_index("ix_order_detail_produit_id", "order_detail", ["produit_id"])


def downgrade() -> None:
    op.drop_table("order_detail")
    op.drop_table("commande")
    op.drop_table("product")
    op.drop_table("client")
