"""Tests for src/models/commerce.py"""

from src.models import Product, ProductLink


class TestProduct:
    def test_external_id_from_metadata(self):
        product = Product.from_dict({"id": "prod_1", "metadata": {"external_id": "9"}})
        assert product.external_id == "9"

    def test_null_metadata(self):
        product = Product.from_dict({"id": "prod_1", "metadata": None})
        assert product.external_id is None


class TestProductLink:
    def test_link_api_shape(self):
        link = ProductLink(product_id="prod_1", brand_id="brand_1")
        assert link.to_dict() == {
            "product": {"product_id": "prod_1"},
            "brand": {"brand_id": "brand_1"},
        }

    def test_duplicates_collapse(self):
        links = {ProductLink("prod_1", "brand_1"), ProductLink("prod_1", "brand_1")}
        assert len(links) == 1
