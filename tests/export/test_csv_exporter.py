"""Tests for src/export/csv_exporter.py"""

import csv
import io

import pytest

from src.export.csv_exporter import EXPORT_FIELDNAMES, ProductCSVExporter


def stored_product(product_service, external_id, title, amount=999, brand="Essence"):
    return product_service.add_product(
        external_id,
        title=title,
        created_at="2026-10-01T00:00:00.000Z",
        variants=[{"prices": [
            {"currency_code": "eur", "amount": 1},
            {"currency_code": "usd", "amount": amount},
        ]}],
        brand={"name": brand} if brand else None,
    )


@pytest.fixture
def exporter(product_service):
    return ProductCSVExporter(product_service, batch_size=2)


class TestProductToRow:
    def test_row_columns(self, exporter, product_service):
        product_id = stored_product(product_service, "1", "Mascara, Black")
        line = exporter.product_to_row(product_service.products[product_id])

        row = next(csv.reader(io.StringIO(line)))
        assert row == [
            product_id, "1", "Mascara, Black", "stored-1", "draft", "Essence", "9.99",
            "2026-10-01T00:00:00.000Z",
        ]

    def test_missing_price_and_brand(self, exporter):
        line = exporter.product_to_row({"id": "prod_1", "title": "Bare", "variants": []})
        assert line == '"prod_1","","Bare","","","","N/A",""\n'

    def test_inner_quotes_doubled(self, exporter, product_service):
        product_id = stored_product(product_service, "1", 'The "Best" Lipstick', brand='Glam "G"')
        line = exporter.product_to_row(product_service.products[product_id])

        assert '"The ""Best"" Lipstick"' in line
        assert '"Glam ""G"""' in line

    def test_every_column_escaped(self, exporter):
        line = exporter.product_to_row({"id": "prod_1", "title": "T", "handle": 'odd,"handle"'})

        row = next(csv.reader(io.StringIO(line)))
        assert row[3] == 'odd,"handle"'
        assert len(row) == len(EXPORT_FIELDNAMES)

    def test_zero_price_shows_na(self, exporter, product_service):
        product_id = stored_product(product_service, "1", "Free", amount=0)
        assert ',"N/A",' in exporter.product_to_row(product_service.products[product_id])


class TestIterCsv:
    def test_header_first(self, exporter):
        lines = list(exporter.iter_csv())
        assert lines == [",".join(EXPORT_FIELDNAMES) + "\n"]

    def test_respects_limit_and_batches(self, exporter, product_service):
        for i in range(5):
            stored_product(product_service, str(i), f"Product {i}")
        calls = []
        original = product_service.query_products

        def spy(fields, skip=0, take=50):
            calls.append((skip, take))
            return original(fields, skip=skip, take=take)

        product_service.query_products = spy

        lines = list(exporter.iter_csv(limit=3, offset=1))

        assert len(lines) == 4
        assert calls == [(1, 2), (3, 1)]
        assert '"Product 1"' in lines[1]

    def test_short_page_ends_export(self, exporter, product_service):
        for i in range(3):
            stored_product(product_service, str(i), f"Product {i}")
        calls = []
        original = product_service.query_products

        def spy(fields, skip=0, take=50):
            calls.append((skip, take))
            return original(fields, skip=skip, take=take)

        product_service.query_products = spy

        lines = list(exporter.iter_csv(limit=100))

        assert len(lines) == 4
        assert calls == [(0, 2), (2, 2)]

    def test_error_line_on_failure(self, exporter, product_service):
        def broken(fields, skip=0, take=50):
            raise RuntimeError("database unavailable")

        product_service.query_products = broken

        lines = list(exporter.iter_csv())

        assert lines[-1] == "\nERROR: database unavailable\n"


class TestExportToFile:
    def test_writes_rows(self, exporter, product_service, tmp_path):
        for i in range(3):
            stored_product(product_service, str(i), f"Product {i}")
        output_path = str(tmp_path / "out" / "products.csv")

        rows = exporter.export_to_file(output_path, limit=10)

        assert rows == 3
        with open(output_path, encoding="utf-8") as f:
            parsed = list(csv.DictReader(f))
        assert [r["External ID"] for r in parsed] == ["0", "1", "2"]
        assert parsed[0]["Price (USD)"] == "9.99"
