"""Static dessert catalogue."""

from dessertshop.catalogue.dessert import Dessert, DessertCategory
from dessertshop.errors import NotFoundError

DESSERTS: tuple[Dessert, ...] = (
    Dessert(
        id="waffle-berries",
        name="Waffle with Berries",
        category=DessertCategory.WAFFLE,
        price=6.50,
        image="./assets/image-waffle-desktop.jpg",
        description="Delicious waffle topped with fresh berries",
    ),
    Dessert(
        id="creme-brulee",
        name="Vanilla Bean Crème Brûlée",
        category=DessertCategory.CREME_BRULEE,
        price=7.00,
        image="./assets/image-creme-brulee-desktop.jpg",
        description="Classic vanilla bean crème brûlée",
    ),
    Dessert(
        id="macaron-mix",
        name="Macaron Mix of Five",
        category=DessertCategory.MACARON,
        price=8.00,
        image="./assets/image-macaron-desktop.jpg",
        description="Assorted macaron flavors",
    ),
    Dessert(
        id="tiramisu",
        name="Classic Tiramisu",
        category=DessertCategory.TIRAMISU,
        price=5.50,
        image="./assets/image-tiramisu-desktop.jpg",
        description="Traditional Italian tiramisu",
    ),
    Dessert(
        id="baklava",
        name="Pistachio Baklava",
        category=DessertCategory.BAKLAVA,
        price=4.00,
        image="./assets/image-baklava-desktop.jpg",
        description="Sweet pistachio baklava",
    ),
    Dessert(
        id="meringue-pie",
        name="Lemon Meringue Pie",
        category=DessertCategory.PIE,
        price=5.00,
        image="./assets/image-meringue-desktop.jpg",
        description="Tangy lemon meringue pie",
    ),
    Dessert(
        id="red-velvet-cake",
        name="Red Velvet Cake",
        category=DessertCategory.CAKE,
        price=4.50,
        image="./assets/image-cake-desktop.jpg",
        description="Rich red velvet cake",
    ),
    Dessert(
        id="salted-caramel-brownie",
        name="Salted Caramel Brownie",
        category=DessertCategory.BROWNIE,
        price=5.50,
        image="./assets/image-brownie-desktop.jpg",
        description="Decadent salted caramel brownie",
    ),
    Dessert(
        id="vanilla-panna-cotta",
        name="Vanilla Panna Cotta",
        category=DessertCategory.PANNA_COTTA,
        price=6.50,
        image="./assets/image-panna-cotta-desktop.jpg",
        description="Creamy vanilla panna cotta",
    ),
)


def get_dessert(dessert_id: str) -> Dessert:
    """Look up a catalogue dessert by id."""
    dessert = next((d for d in DESSERTS if d.id == dessert_id), None)
    if dessert is None:
        raise NotFoundError({"dessert_id": [f"Dessert {dessert_id} not found in catalogue"]})
    return dessert


def desserts_by_category(category: DessertCategory) -> list[Dessert]:
    return [d for d in DESSERTS if d.category == category]
