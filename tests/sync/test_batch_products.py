"""Tests for src/sync/batch_products.py"""

import pytest

from src.catalog.mapper import map_to_platform_format, split_by_external_id
from src.models import CatalogProduct, ProductLink
from src.sync.batch_products import BatchInput, batch_products_workflow, normalize_status


@pytest.fixture
def batch(catalog_products):
    """All three catalog products are new."""
    create, update = split_by_external_id(catalog_products, [])
    return BatchInput(create=create, update=update)


class TestNormalizeStatus:
    @pytest.mark.parametrize("status, expected", [
        ("draft", "draft"),
        ("PUBLISHED", "published"),
        ("unknown", "draft"),
        ("", "draft"),
    ])
    def test_maps_onto_enum(self, status, expected):
        assert normalize_status(status) == expected


class TestBrands:
    def test_creates_missing_brands_once(self, container, brand_service, batch):
        brand_service.add_brand("Essence")

        result = batch_products_workflow.run(batch, container)

        assert result.ok
        assert brand_service.create_calls == [["Glamour Beauty"]]
        assert set(brand_service.brands) == {"Essence", "Glamour Beauty"}

    def test_no_brand_names_skips_lookup(self, container, brand_service, make_catalog_dict):
        product = CatalogProduct.from_dict(make_catalog_dict(16, "Apple", brand=""))
        batch = BatchInput(create=[map_to_platform_format(product)])

        result = batch_products_workflow.run(batch, container)

        assert result.ok
        assert brand_service.create_calls == []


class TestCategories:
    def test_reuses_existing_category_by_handle(self, container, product_service, batch):
        beauty = product_service.add_category("Beauty", "beauty")

        batch_products_workflow.run(batch, container)

        handles = sorted(c.handle for c in product_service.categories.values())
        assert handles == ["beauty", "fragrances"]
        payload = product_service.created_payloads[0]
        assert payload["category_ids"] == [beauty.id]

    def test_creation_failure_falls_back_to_existing(self, container, product_service, batch):
        product_service.add_category("beauty", "beauty")
        product_service.fail_create_categories = True

        result = batch_products_workflow.run(batch, container)

        assert result.ok
        by_title = {p["title"]: p for p in product_service.created_payloads}
        assert by_title["Powder Canister"]["category_ids"] == []
        assert len(by_title["Essence Mascara Lash Princess"]["category_ids"]) == 1


class TestCreateAndUpdate:
    def test_created_payload(self, container, product_service, batch):
        result = batch_products_workflow.run(batch, container)

        assert len(result.result["created"]) == 3
        payload = product_service.created_payloads[0]
        assert payload["status"] == "draft"
        assert payload["metadata"] == {"external_id": "1"}
        assert "brand_name" not in payload

    def test_updates_stored_product(self, container, product_service, catalog_products):
        stored_id = product_service.add_product("2", title="Old title")
        existing = product_service.list_products(["1", "2", "3"])
        create, update = split_by_external_id(catalog_products, existing)

        result = batch_products_workflow.run(BatchInput(create=create, update=update), container)

        assert [p.id for p in result.result["updated"]] == [stored_id]
        assert product_service.products[stored_id]["title"] == "Eyeshadow Palette with Mirror"
        product_id, data = product_service.update_calls[0]
        assert product_id == stored_id
        assert len(data["category_ids"]) == 1


class TestLinks:
    def test_links_every_branded_product(self, container, link_service, brand_service, batch):
        result = batch_products_workflow.run(batch, container)

        created = {p.external_id: p.id for p in result.result["created"]}
        expected = {
            ProductLink(created["1"], brand_service.brands["Essence"].id),
            ProductLink(created["2"], brand_service.brands["Glamour Beauty"].id),
            ProductLink(created["3"], brand_service.brands["Essence"].id),
        }
        assert set(link_service.created[0]) == expected
        assert link_service.dismissed[0] == link_service.created[0]

    def test_link_errors_do_not_fail_batch(self, container, link_service, batch):
        link_service.fail_dismiss = True
        link_service.fail_create = True

        result = batch_products_workflow.run(batch, container)

        assert result.ok


class TestCompensation:
    def test_failed_update_rolls_back_created_rows(self, container, product_service, brand_service,
                                                    catalog_products):
        stored_id = product_service.add_product("2")
        existing = product_service.list_products(["2"])
        create, update = split_by_external_id(catalog_products, existing)
        product_service.fail_update_products = True

        result = batch_products_workflow.run(BatchInput(create=create, update=update), container)

        assert not result.ok
        assert result.errors[0].step == "update-products-step"
        assert len(product_service.deleted_products) == 2
        assert stored_id not in product_service.deleted_products
        assert len(product_service.deleted_categories) == 2
        assert len(brand_service.deleted) == 2

    def test_partially_created_categories_are_rolled_back(self, container, product_service, batch):
        product_service.fail_category_handle = "fragrances"
        product_service.fail_create_products = True

        result = batch_products_workflow.run(batch, container)

        assert result.errors[0].step == "create-products-step"
        assert len(product_service.deleted_categories) == 1
        assert product_service.categories == {}

    def test_pre_existing_brands_are_kept(self, container, product_service, brand_service, batch):
        essence = brand_service.add_brand("Essence")
        product_service.fail_create_products = True

        result = batch_products_workflow.run(batch, container)

        assert result.errors[0].step == "create-products-step"
        assert essence.id not in brand_service.deleted
        assert "Essence" in brand_service.brands
        assert "Glamour Beauty" not in brand_service.brands

    def test_throw_on_error(self, container, product_service, batch):
        product_service.fail_create_products = True
        with pytest.raises(Exception, match="Failed to create products"):
            batch_products_workflow.run(batch, container, throw_on_error=True)
