from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    label: str
    description: str


CATEGORIES = (
    Category("cabin", "Cozy cabins in the woods"),
    Category("airstream", "Vintage travel trailers"),
    Category("tent", "Glamping and tents"),
    Category("warehouse", "Converted warehouse lofts"),
    Category("cottage", "Countryside cottages"),
    Category("magic", "Unusual and magical stays"),
    Category("container", "Shipping container homes"),
    Category("caravan", "Caravans and campers"),
    Category("tiny", "Tiny homes"),
    Category("lodge", "Mountain lodges"),
)

CATEGORY_LABELS = frozenset(c.label for c in CATEGORIES)


def is_valid_category(label: str) -> bool:
    return label in CATEGORY_LABELS
