# tests/core/test_scoping.py
import pytest

from flyer_api.db import models
from flyer_api.repositories import OwnerScope, ProductsRepository


class TestOwnerScope:

    def test_requires_an_owner(self, db_session):
        with pytest.raises(ValueError):
            OwnerScope(db_session, models.Product, "")

    def test_insert_forces_the_scope_owner(self, db_session, make_user):
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")

        scope = OwnerScope(db_session, models.Product, alice.id)
        product = scope.insert(name="Pen", price=1, category="office", owner_user_id=bob.id)

        assert product.owner_user_id == alice.id

    def test_reads_never_cross_owners(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")
        bobs = make_product(bob.id, "Bob's pen")

        scope = OwnerScope(db_session, models.Product, alice.id)

        assert scope.find_by_id(bobs.id) is None
        assert scope.find_many() == []
        assert scope.count() == 0
        assert not scope.exists(models.Product.id == bobs.id)

    def test_writes_never_cross_owners(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")
        bobs = make_product(bob.id, "Bob's pen", price=2)

        scope = OwnerScope(db_session, models.Product, alice.id)

        assert scope.update_by_id(bobs.id, {"price": 0}) is None
        assert scope.delete_by_id(bobs.id) is False
        db_session.commit()

        still_there = OwnerScope(db_session, models.Product, bob.id).find_by_id(bobs.id)
        assert still_there is not None
        assert still_there.price == 2

    def test_update_cannot_reassign_owner(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")
        pen = make_product(alice.id, "Pen")

        scope = OwnerScope(db_session, models.Product, alice.id)
        updated = scope.update_by_id(pen.id, {"owner_user_id": bob.id, "name": "Blue pen"})

        assert updated.owner_user_id == alice.id
        assert updated.name == "Blue pen"

    def test_delete_own_record(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        pen = make_product(alice.id, "Pen")

        scope = OwnerScope(db_session, models.Product, alice.id)
        assert scope.delete_by_id(pen.id) is True
        db_session.commit()
        assert scope.find_by_id(pen.id) is None


class TestProductsRepository:

    def test_barcode_taken_is_per_owner(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        bob = make_user("bob@example.com")
        pen = make_product(alice.id, "Pen", barcode="123")

        repo = ProductsRepository(db_session)

        assert repo.barcode_taken(alice.id, "123")
        assert not repo.barcode_taken(bob.id, "123")
        assert not repo.barcode_taken(alice.id, "123", exclude_id=pen.id)

    def test_search_matches_name_description_and_barcode(
        self, db_session, make_user, make_product
    ):
        alice = make_user("alice@example.com")
        make_product(alice.id, "Green Tea")
        make_product(alice.id, "Coffee", description="Dark roast, tea-free")
        make_product(alice.id, "Mug", barcode="TEA-0001")
        make_product(alice.id, "Spoon")

        repo = ProductsRepository(db_session)
        names = {p.name for p in repo.search(alice.id, "TEA")}

        assert names == {"Green Tea", "Coffee", "Mug"}

    def test_search_treats_wildcards_literally(self, db_session, make_user, make_product):
        alice = make_user("alice@example.com")
        make_product(alice.id, "100% cotton")
        make_product(alice.id, "Wool")

        repo = ProductsRepository(db_session)

        assert [p.name for p in repo.search(alice.id, "%")] == ["100% cotton"]
        assert repo.search(alice.id, "_") == []
