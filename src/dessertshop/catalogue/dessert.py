"""Dessert model: the purchasable item listed in the catalogue."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DessertCategory(Enum):
    WAFFLE = "Waffle"
    CREME_BRULEE = "Crème Brûlée"
    MACARON = "Macaron"
    TIRAMISU = "Tiramisu"
    BAKLAVA = "Baklava"
    PIE = "Pie"
    CAKE = "Cake"
    BROWNIE = "Brownie"
    PANNA_COTTA = "Panna Cotta"


class Dessert(BaseModel):
    """A catalogue entry. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    category: DessertCategory
    price: float = Field(ge=0)
    image: str
    description: str | None = None
    in_stock: bool = True
