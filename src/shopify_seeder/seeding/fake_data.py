"""Synthetic product draft generation backed by Faker."""
import string
from datetime import datetime, timezone
from typing import Optional

from faker import Faker

from ..schemas.products import ProductDraft, ProductPublication


MARKER_TAG = "test_product"
TAG_VOCABULARY = ("New", "Featured", "Limited", "Sale")
RANDOM_TAG_COUNT = 2

IMAGE_SEED_LENGTH = 8
IMAGE_URL_TEMPLATE = "https://picsum.photos/seed/{seed}/400/400.jpg"

PRODUCT_ADJECTIVES = (
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Generic", "Handcrafted",
    "Handmade", "Licensed", "Refined", "Unbranded", "Tasty",
)
PRODUCT_MATERIALS = (
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Metal", "Soft", "Fresh", "Frozen", "Bronze", "Marble",
)
PRODUCT_NOUNS = (
    "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball", "Gloves",
    "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels", "Soap", "Tuna",
    "Chicken", "Fish", "Cheese", "Bacon", "Pizza", "Salad", "Sausages", "Chips",
)
DEPARTMENTS = (
    "Books", "Movies", "Music", "Games", "Electronics", "Computers", "Home",
    "Garden", "Tools", "Grocery", "Health", "Beauty", "Toys", "Kids", "Baby",
    "Clothing", "Shoes", "Jewelry", "Sports", "Outdoors", "Automotive",
    "Industrial",
)


class ProductDraftFactory:
    """Builds one ProductDraft per product index.

    Tracks every image seed handed out so no two drafts in a run point at
    the same placeholder image.
    """

    def __init__(self, faker: Optional[Faker] = None):
        self.faker = faker or Faker()
        self._used_seeds: set[str] = set()

    def draft(
        self,
        index: int,
        include_test_tag: bool = True,
        publication_id: Optional[str] = None,
    ) -> ProductDraft:
        """Generate the field set for product ``index``.

        Args:
            index: 1-based product position (not used in the generated data)
            include_test_tag: Append the marker tag for later bulk cleanup
            publication_id: Online Store publication to publish the product to

        Returns:
            Frozen ProductDraft with a unique placeholder image URL
        """
        tags = list(self.random_tags())
        if include_test_tag:
            tags.append(MARKER_TAG)

        publication = None
        if publication_id:
            publication = ProductPublication(
                publication_id=publication_id,
                publish_date=datetime.now(timezone.utc),
            )

        return ProductDraft(
            title=self.product_name(),
            description_html=f"<p>{self.faker.paragraph(nb_sentences=3)}</p>",
            vendor=self.faker.company(),
            product_type=self.faker.random_element(DEPARTMENTS),
            tags=tuple(tags),
            publication=publication,
            image_url=IMAGE_URL_TEMPLATE.format(seed=self.image_seed()),
        )

    def product_name(self) -> str:
        return " ".join(
            (
                self.faker.random_element(PRODUCT_ADJECTIVES),
                self.faker.random_element(PRODUCT_MATERIALS),
                self.faker.random_element(PRODUCT_NOUNS),
            )
        )

    def random_tags(self) -> list[str]:
        """Pick distinct tags from the vocabulary, without replacement."""
        return list(
            self.faker.random_sample(elements=TAG_VOCABULARY, length=RANDOM_TAG_COUNT)
        )

    def image_seed(self) -> str:
        """Return an alphanumeric seed not yet used in this run."""
        while True:
            seed = self.faker.lexify(
                "?" * IMAGE_SEED_LENGTH,
                letters=string.ascii_letters + string.digits,
            )
            if seed not in self._used_seeds:
                self._used_seeds.add(seed)
                return seed
