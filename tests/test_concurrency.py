"""Deux créations de ligne simultanées ne peuvent pas dépasser le stock."""

import threading

from ecommerce_api.core.database import SessionLocal
from ecommerce_api.core.exceptions import InsufficientStock
from ecommerce_api.schemas.order import OrderDetailCreate
from ecommerce_api.services.inventory_service import InventoryService


def test_concurrent_creates_never_oversell(make_product, make_order, stock_of):
    product_id = make_product(stock=5)
    order_id = make_order()

    barrier = threading.Barrier(2)
    results = []
    lock = threading.Lock()

    def worker():
        session = SessionLocal()
        try:
            barrier.wait()
            InventoryService(session).create_detail(
                OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=5)
            )
            outcome = "ok"
        except InsufficientStock:
            outcome = "insufficient"
        finally:
            session.close()
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert sorted(results) == ["insufficient", "ok"]
    assert stock_of(product_id) == 0


def test_many_concurrent_single_units(make_product, make_order, stock_of):
    product_id = make_product(stock=3)
    order_id = make_order()

    workers = 6
    barrier = threading.Barrier(workers)
    successes = []

    def worker():
        session = SessionLocal()
        try:
            barrier.wait()
            InventoryService(session).create_detail(
                OrderDetailCreate(commande_id=order_id, produit_id=product_id, quantite=1)
            )
            successes.append(1)
        except InsufficientStock:
            pass
        finally:
            session.close()

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert len(successes) == 3
    assert stock_of(product_id) == 0
