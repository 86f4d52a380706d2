"""Cohérence entre lignes de commande, stock produit et total de commande."""

from decimal import Decimal

import pytest
from sqlalchemy import select, func

from ecommerce_api.core.exceptions import InsufficientStock, InvalidReference, NotFound
from ecommerce_api.models.order import Order, OrderDetail
from ecommerce_api.models.product import Product
from ecommerce_api.schemas.order import OrderDetailCreate, OrderDetailUpdate
from ecommerce_api.services.inventory_service import InventoryService


def _stock(db, product_id):
    db.expire_all()
    return db.get(Product, product_id).stock


def _total(db, order_id):
    db.expire_all()
    return db.get(Order, order_id).total


def _details_count(db):
    return db.scalar(select(func.count(OrderDetail.id)))


class TestCreateDetail:

    def test_decrements_stock_and_snapshots_price(self, db, make_product, make_order):
        product_id = make_product(prix="19.99", stock=10)
        order_id = make_order()

        detail = InventoryService(db).create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=3)
        )

        assert detail.quantite == 3
        assert detail.prix_unitaire == Decimal("19.99")
        assert _stock(db, product_id) == 7
        assert _total(db, order_id) == Decimal("59.97")

    def test_insufficient_stock_changes_nothing(self, db, make_product, make_order):
        product_id = make_product(stock=10)
        order_id = make_order()

        with pytest.raises(InsufficientStock):
            InventoryService(db).create_detail(
                OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=11)
            )

        assert _stock(db, product_id) == 10
        assert _details_count(db) == 0
        assert _total(db, order_id) == Decimal("0")

    def test_exact_stock_is_allowed(self, db, make_product, make_order):
        product_id = make_product(stock=4)
        order_id = make_order()

        InventoryService(db).create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=4)
        )

        assert _stock(db, product_id) == 0

    def test_unknown_order_is_invalid_reference(self, db, make_product):
        product_id = make_product(stock=10)

        with pytest.raises(InvalidReference):
            InventoryService(db).create_detail(
                OrderDetailCreate(commande_id=999, produit_id=product_id, quantite=1)
            )
        assert _stock(db, product_id) == 10

    def test_unknown_product_is_invalid_reference(self, db, make_order):
        order_id = make_order()

        with pytest.raises(InvalidReference):
            InventoryService(db).create_detail(
                OrderDetailCreate(commande_id=order_id, produit_id=999, quantite=1)
            )
        assert _details_count(db) == 0


class TestUpdateQuantity:

    @pytest.fixture
    def detail_setup(self, db, make_product, make_order):
        product_id = make_product(prix="10.00", stock=10)
        order_id = make_order()
        detail = InventoryService(db).create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=3)
        )
        return detail.id, product_id, order_id

    def test_increase_takes_the_difference(self, db, detail_setup):
        detail_id, product_id, order_id = detail_setup

        InventoryService(db).update_quantity(detail_id, 5)

        assert _stock(db, product_id) == 5
        assert _total(db, order_id) == Decimal("50.00")

    def test_decrease_returns_the_difference(self, db, detail_setup):
        detail_id, product_id, order_id = detail_setup

        InventoryService(db).update_quantity(detail_id, 1)

        assert _stock(db, product_id) == 9
        assert _total(db, order_id) == Decimal("10.00")

    def test_same_quantity_is_a_no_op(self, db, detail_setup):
        detail_id, product_id, _ = detail_setup

        detail = InventoryService(db).update_quantity(detail_id, 3)

        assert detail.quantite == 3
        assert _stock(db, product_id) == 7

    def test_increase_beyond_stock_changes_nothing(self, db, detail_setup):
        detail_id, product_id, order_id = detail_setup

        with pytest.raises(InsufficientStock):
            InventoryService(db).update_quantity(detail_id, 11)

        db.expire_all()
        assert db.get(OrderDetail, detail_id).quantite == 3
        assert _stock(db, product_id) == 7
        assert _total(db, order_id) == Decimal("30.00")

    def test_increase_to_exactly_remaining_stock(self, db, detail_setup):
        detail_id, product_id, _ = detail_setup

        InventoryService(db).update_quantity(detail_id, 10)

        assert _stock(db, product_id) == 0

    def test_price_is_never_recalculated(self, db, detail_setup):
        detail_id, product_id, order_id = detail_setup

        product = db.get(Product, product_id)
        product.prix = Decimal("99.00")
        db.commit()

        detail = InventoryService(db).update_quantity(detail_id, 4)

        assert detail.prix_unitaire == Decimal("10.00")
        assert _total(db, order_id) == Decimal("40.00")

    def test_patch_without_quantity_keeps_detail(self, db, detail_setup):
        detail_id, product_id, _ = detail_setup

        detail = InventoryService(db).update_detail(detail_id, OrderDetailUpdate())

        assert detail.quantite == 3
        assert _stock(db, product_id) == 7

    def test_unknown_detail(self, db):
        with pytest.raises(NotFound):
            InventoryService(db).update_quantity(12345, 2)


class TestDelete:

    def test_delete_detail_restocks(self, db, make_product, make_order):
        product_id = make_product(prix="5.00", stock=10)
        order_id = make_order()
        service = InventoryService(db)
        detail = service.create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=4)
        )

        service.delete_detail(detail.id)

        assert _stock(db, product_id) == 10
        assert _total(db, order_id) == Decimal("0")
        assert _details_count(db) == 0

    def test_delete_detail_of_deleted_product(self, db, make_product, make_order):
        product_id = make_product(stock=10)
        order_id = make_order()
        service = InventoryService(db)
        detail = service.create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=2)
        )
        db.delete(db.get(Product, product_id))
        db.commit()

        service.delete_detail(detail.id)

        assert _details_count(db) == 0

    def test_update_detail_of_deleted_product(self, db, make_product, make_order):
        product_id = make_product(stock=10)
        order_id = make_order()
        service = InventoryService(db)
        detail = service.create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=2)
        )
        db.delete(db.get(Product, product_id))
        db.commit()

        with pytest.raises(InvalidReference):
            service.update_quantity(detail.id, 3)

    def test_delete_order_restocks_every_line(self, db, make_product, make_order):
        first = make_product(stock=10)
        second = make_product(stock=5)
        order_id = make_order()
        service = InventoryService(db)
        service.create_detail(OrderDetailCreate(commande_id=order_id, produit_id=first, quantite=3))
        service.create_detail(OrderDetailCreate(commande_id=order_id, produit_id=second, quantite=5))

        service.delete_order(order_id)

        assert _stock(db, first) == 10
        assert _stock(db, second) == 5
        assert db.get(Order, order_id) is None
        assert _details_count(db) == 0

    def test_delete_unknown_detail(self, db):
        with pytest.raises(NotFound):
            InventoryService(db).delete_detail(999)


def test_stock_scenario_from_ten(db, make_product, make_order):
    """Stock 10 : +4, refus de 10, passage à 2, puis suppression"""
    product_id = make_product(stock=10)
    order_id = make_order()
    service = InventoryService(db)

    first = service.create_detail(
        OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=4)
    )
    assert _stock(db, product_id) == 6

    with pytest.raises(InsufficientStock):
        service.create_detail(
            OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=10)
        )
    assert _stock(db, product_id) == 6

    service.update_quantity(first.id, 2)
    assert _stock(db, product_id) == 8

    service.delete_detail(first.id)
    assert _stock(db, product_id) == 10
    assert _details_count(db) == 0


def test_stock_never_negative_after_mixed_operations(db, make_product, make_order):
    product_id = make_product(stock=6)
    order_id = make_order()
    service = InventoryService(db)

    details = []
    for quantite in (2, 3, 4, 1):
        try:
            details.append(service.create_detail(
                OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=quantite)
            ))
        except InsufficientStock:
            pass
        assert _stock(db, product_id) >= 0

    for detail in details:
        try:
            service.update_quantity(detail.id, detail.quantite + 5)
        except InsufficientStock:
            pass
        assert _stock(db, product_id) >= 0

    assert _stock(db, product_id) == 0
