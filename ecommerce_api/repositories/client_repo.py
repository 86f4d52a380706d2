# ===================================
# ecommerce_api/repositories/client_repo.py
# ===================================
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from ecommerce_api.core.exceptions import NotFound, ValidationFailed
from ecommerce_api.core.security import get_password_hash
from ecommerce_api.models.client import Client, ClientRole
from ecommerce_api.models.order import Order, OrderDetail
from ecommerce_api.repositories.base import commit
from ecommerce_api.schemas.client import ClientUpdate
from ecommerce_api.services.patching import apply_patch


class ClientRepository:
    """Repository pour la gestion des clients"""

    def __init__(self, db: Session):
        self.db = db

    def get_client_by_id(self, client_id: int, with_orders: bool = False) -> Optional[Client]:
        """Récupérer un client par son ID"""
        query = select(Client).where(Client.id == client_id)
        if with_orders:
            query = query.options(
                selectinload(Client.orders)
                .selectinload(Order.order_details)
                .selectinload(OrderDetail.product)
            )
        return self.db.scalar(query)

    def get_client_or_404(self, client_id: int, with_orders: bool = False) -> Client:
        client = self.get_client_by_id(client_id, with_orders=with_orders)
        if client is None:
            raise NotFound("Client non trouvé")
        return client

    def get_client_by_email(self, email: str) -> Optional[Client]:
        """Récupérer un client par son email"""
        return self.db.scalar(select(Client).where(Client.email == email.lower()))

    def get_clients(self, skip: int = 0, limit: int = 20) -> List[Client]:
        """Récupérer les clients avec pagination"""
        return list(self.db.scalars(
            select(Client).order_by(Client.id).offset(skip).limit(limit)
        ))

    def create_client(self, nom: str, prenom: str, email: str, password: str,
                      adresse: Optional[str] = None, telephone: Optional[str] = None,
                      role: str = ClientRole.USER) -> Client:
        """Créer un nouveau client avec un mot de passe haché"""
        if self.get_client_by_email(email):
            raise ValidationFailed("Un client avec cet email existe déjà")

        client = Client(
            nom=nom,
            prenom=prenom,
            email=email.lower(),
            mot_de_passe=get_password_hash(password),
            adresse=adresse or "",
            telephone=telephone or "",
            role=role,
        )
        self.db.add(client)
        commit(self.db)
        self.db.refresh(client)
        return client

    def update_client(self, client_id: int, client_update: ClientUpdate) -> Client:
        """Mettre à jour les champs fournis d'un client"""
        client = self.get_client_or_404(client_id)

        if client_update.email is not None:
            client_update.email = client_update.email.lower()
            existing = self.get_client_by_email(client_update.email)
            if existing is not None and existing.id != client.id:
                raise ValidationFailed("Un client avec cet email existe déjà")

        apply_patch(client, client_update)
        commit(self.db, Client, client_id)
        return client

    def delete_client(self, client_id: int) -> None:
        """Supprimer un client sans commande"""
        client = self.get_client_or_404(client_id)

        orders_count = self.db.scalar(
            select(func.count(Order.id)).where(Order.client_id == client_id)
        )
        if orders_count:
            raise ValidationFailed("Impossible de supprimer un client qui possède des commandes")

        self.db.delete(client)
        commit(self.db, Client, client_id)
