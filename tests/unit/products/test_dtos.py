"""Unit tests for product DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid(self):
        dto = CreateProductDTO(
            name="Widget", description="A fine widget", price="19.99", stock=3
        )
        assert dto.price == Decimal("19.99")
        assert dto.stock == 3

    def test_stock_defaults_to_zero(self):
        dto = CreateProductDTO(name="Widget", description="d", price=Decimal("1"))
        assert dto.stock == 0

    def test_name_is_stripped(self):
        dto = CreateProductDTO(name="  Widget  ", description="d", price=1)
        assert dto.name == "Widget"

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_blank_text_rejected(self, field):
        data = {"name": "Widget", "description": "d", "price": 1}
        data[field] = "   "
        with pytest.raises(ValidationError):
            CreateProductDTO(**data)

    def test_missing_price_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Widget", description="d")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            CreateProductDTO(name="Widget", description="d", price="-0.01")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            CreateProductDTO(name="Widget", description="d", price=1, stock=-1)

    def test_zero_price_allowed(self):
        dto = CreateProductDTO(name="Freebie", description="d", price=0)
        assert dto.price == Decimal("0")

    def test_is_frozen(self):
        dto = CreateProductDTO(name="Widget", description="d", price=1)
        with pytest.raises(ValidationError):
            dto.name = "Other"


class TestUpdateProductDTO:
    def test_empty_update_has_no_changes(self):
        assert UpdateProductDTO().changes() == {}

    def test_changes_only_include_supplied_fields(self):
        dto = UpdateProductDTO(price="5.50")
        assert dto.changes() == {"price": Decimal("5.50")}

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(stock=-3)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(name="")
