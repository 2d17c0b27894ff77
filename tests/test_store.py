"""
Unit tests for the JSON record store
"""

import json

import pytest

from pdv.core import store as store_module
from pdv.core.errors import NotFoundError, StorageError
from pdv.core.store import COLLECTIONS, JOURNAL_FILE, PRODUCTS, SALES, SETTINGS, JsonStore
from pdv.models.product import Product
from pdv.services import catalog_service, sales_service


def test_initialize_creates_every_collection(store: JsonStore):
    """Test that each collection file exists with its empty default"""
    for name in COLLECTIONS:
        assert store.path_for(name).exists()
    assert store.read(PRODUCTS) == []
    assert store.read(SETTINGS) == {}


def test_initialize_keeps_existing_data(store: JsonStore):
    store.path_for(PRODUCTS).write_text(json.dumps([{"id": 7, "tenantId": 1, "name": "X", "price": 1}]))
    store.initialize()
    assert store.read(PRODUCTS)[0]["id"] == 7


def test_insert_assigns_max_plus_one(store: JsonStore):
    """Test id allocation: 1 when empty, then max(existing) + 1"""
    with store.transaction() as uow:
        products = uow.repository(PRODUCTS, Product)
        first = products.insert(Product(tenant_id=1, name="A", price=1.0))
    assert first.id == 1

    store.path_for(PRODUCTS).write_text(json.dumps([
        {"id": 10, "tenantId": 1, "name": "A", "price": 1},
        {"id": 3, "tenantId": 1, "name": "B", "price": 1},
    ]))
    with store.transaction() as uow:
        second = uow.repository(PRODUCTS, Product).insert(Product(tenant_id=1, name="C", price=1.0))
    assert second.id == 11


def test_records_are_stored_with_camel_case_keys(store: JsonStore):
    with store.transaction() as uow:
        uow.repository(PRODUCTS, Product).insert(
            Product(tenant_id=2, name="Água", price=2.5, stock=10, low_stock_alert=3)
        )
    raw = store.read(PRODUCTS)[0]
    assert raw["tenantId"] == 2
    assert raw["lowStockAlert"] == 3
    assert raw["name"] == "Água"
    # pretty-printed, non-ASCII kept verbatim
    text = store.path_for(PRODUCTS).read_text(encoding="utf-8")
    assert "Água" in text
    assert "\n  " in text


def test_get_filters_by_tenant(store: JsonStore):
    with store.transaction() as uow:
        product = uow.repository(PRODUCTS, Product).insert(Product(tenant_id=1, name="A", price=1.0))

    with store.transaction() as uow:
        products = uow.repository(PRODUCTS, Product)
        assert products.get(product.id, tenant_id=1) is not None
        assert products.get(product.id, tenant_id=2) is None
        assert products.list(2) == []


def test_update_missing_record_raises(store: JsonStore):
    with pytest.raises(NotFoundError):
        with store.transaction() as uow:
            uow.repository(PRODUCTS, Product).update(Product(id=99, tenant_id=1, name="A", price=1.0))


def test_failed_transaction_writes_nothing(store: JsonStore):
    """Test that an exception inside the block discards all changes"""
    with pytest.raises(RuntimeError):
        with store.transaction() as uow:
            uow.repository(PRODUCTS, Product).insert(Product(tenant_id=1, name="A", price=1.0))
            raise RuntimeError("boom")

    assert store.read(PRODUCTS) == []


def test_multi_collection_commit_removes_journal(store: JsonStore):
    with store.transaction() as uow:
        uow.repository(PRODUCTS, Product).insert(Product(tenant_id=1, name="A", price=1.0))
        uow.collection(SALES).append({"id": 1, "tenantId": 1})
        uow.mark_dirty(SALES)

    assert not store.journal_path.exists()
    assert len(store.read(PRODUCTS)) == 1
    assert len(store.read(SALES)) == 1


def test_recover_replays_pending_journal(store: JsonStore):
    """Test that a commit interrupted after journaling is completed on startup"""
    pending = {
        PRODUCTS: [{"id": 1, "tenantId": 1, "name": "A", "price": 1, "stock": 0}],
        SALES: [{"id": 1, "tenantId": 1}],
    }
    (store.data_dir / JOURNAL_FILE).write_text(json.dumps(pending))

    store.initialize()

    assert not store.journal_path.exists()
    assert store.read(PRODUCTS) == pending[PRODUCTS]
    assert store.read(SALES) == pending[SALES]


def test_recover_without_journal_is_noop(store: JsonStore):
    assert store.recover() is False


def test_corrupt_document_raises_storage_error(store: JsonStore):
    store.path_for(PRODUCTS).write_text("{not json")
    with pytest.raises(StorageError):
        store.read(PRODUCTS)


def test_unknown_collection_rejected(tmp_path):
    with pytest.raises(StorageError):
        JsonStore(tmp_path).path_for("orders")


def _fail_writes_to(monkeypatch, target: str, times: int | None = None):
    """Make _write_json_atomic raise OSError for one document, ``times`` times or forever"""
    original = store_module._write_json_atomic
    failures = {"left": times}

    def flaky_write(path, data):
        if path.name == target and failures["left"] != 0:
            if failures["left"] is not None:
                failures["left"] -= 1
            raise OSError("disk full")
        original(path, data)

    monkeypatch.setattr(store_module, "_write_json_atomic", flaky_write)


def test_interrupted_commit_is_completed_from_journal(store: JsonStore, monkeypatch):
    """Test that a collection write failing once mid-commit is finished by replaying the journal"""
    product = catalog_service.create_product(store, 1, {"name": "Água", "price": 2.5, "stock": 10})
    _fail_writes_to(monkeypatch, f"{SALES}.json", times=1)

    sales_service.record_sale(
        store,
        tenant_id=1,
        user_id=1,
        items=[{"productId": product.id, "price": 2.5, "quantity": 4}],
        payment_method="cash",
    )

    assert not store.journal_path.exists()
    assert store.read(PRODUCTS)[0]["stock"] == 6
    assert len(store.read(SALES)) == 1


def test_pending_journal_blocks_transactions_until_applied(store: JsonStore, monkeypatch):
    """Test that a stale journal is never replayed over later writes"""
    product = catalog_service.create_product(store, 1, {"name": "Água", "price": 2.5, "stock": 10})
    _fail_writes_to(monkeypatch, f"{SALES}.json")

    with pytest.raises(StorageError):
        sales_service.record_sale(
            store,
            tenant_id=1,
            user_id=1,
            items=[{"productId": product.id, "price": 2.5, "quantity": 4}],
            payment_method="cash",
        )
    assert store.journal_path.exists()

    with pytest.raises(StorageError):
        catalog_service.update_product(store, 1, product.id, {"stock": 50})

    monkeypatch.undo()

    # the next transaction applies the journal first, then its own change
    with store.transaction() as uow:
        assert uow.repository(PRODUCTS, Product).get(product.id).stock == 6
        assert len(uow.collection(SALES)) == 1
    assert not store.journal_path.exists()

    catalog_service.update_product(store, 1, product.id, {"stock": 50})
    store.initialize()

    assert store.read(PRODUCTS)[0]["stock"] == 50
    assert len(store.read(SALES)) == 1
