# ===================================
# ecommerce_api/services/stats_service.py
# ===================================

from decimal import Decimal
from sqlalchemy.orm import Session

from ecommerce_api.repositories.client_repo import ClientRepository
from ecommerce_api.schemas.order import ClientStatsOut, RecentOrderOut

RECENT_ORDERS_LIMIT = 5


class StatsService:
    """Statistiques d'achat des clients"""

    def __init__(self, db: Session):
        self.db = db
        self.client_repo = ClientRepository(db)

    def client_stats(self, client_id: int) -> ClientStatsOut:
        """Récupérer les statistiques de commandes d'un client"""
        client = self.client_repo.get_client_or_404(client_id, with_orders=True)
        orders = sorted(client.orders, key=lambda o: (o.date_commande, o.id), reverse=True)

        orders_by_status = {}
        for order in orders:
            orders_by_status[order.statut] = orders_by_status.get(order.statut, 0) + 1

        return ClientStatsOut(
            id=client.id,
            nom=client.nom,
            prenom=client.prenom,
            email=client.email,
            adresse=client.adresse,
            telephone=client.telephone,
            role=client.role,
            total_orders=len(orders),
            total_spent=sum((Decimal(o.total) for o in orders), Decimal("0.00")),
            total_products_bought=sum(o.items_count for o in orders),
            orders_by_status=orders_by_status,
            last_order_date=orders[0].date_commande if orders else None,
            recent_orders=[
                RecentOrderOut(
                    id=o.id,
                    date_commande=o.date_commande,
                    statut=o.statut,
                    total=o.total,
                    number_of_items=o.items_count,
                )
                for o in orders[:RECENT_ORDERS_LIMIT]
            ],
        )
