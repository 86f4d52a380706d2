# ===================================
# ecommerce_api/models/client.py
# ===================================
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ecommerce_api.core.database import Base


class ClientRole:
    """Rôles possibles d'un client"""
    USER = "user"
    ADMIN = "admin"


class Client(Base):
    __tablename__ = "client"

    id = Column(Integer, primary_key=True, index=True)
    nom = Column(String, nullable=False)
    prenom = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    # Authentification
    mot_de_passe = Column(String, nullable=False)  # hash, jamais sérialisé
    role = Column(String, default=ClientRole.USER, nullable=False)

    # Coordonnées
    adresse = Column(String, default="", nullable=False)
    telephone = Column(String, default="", nullable=False)

    # Relations
    orders = relationship("Order", back_populates="client")

    def __repr__(self):
        return f"<Client(id={self.id}, email='{self.email}')>"
