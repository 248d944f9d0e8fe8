"""
Pydantic Models - Inventory and API schemas

Contains the records consumed from the inventory API and the request
bodies accepted by the HTTP router.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ============================================================
# Inventory records
# ============================================================

class Stock(BaseModel):
    """Available quantity for a product, as returned by /stock/{id}."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(validation_alias=AliasChoices("product_id", "productId", "id"))
    amount: int = Field(ge=0)


class Product(BaseModel):
    """Descriptive product data, as returned by /products/{id}."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    price: Decimal = Field(ge=0)
    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("image_url", "imageUrl", "image"),
    )


# ============================================================
# API request models
# ============================================================

class AddProductRequest(BaseModel):
    product_id: int


class UpdateProductAmountRequest(BaseModel):
    product_id: int
    amount: int
