"""Product service: CRUD on the products collection."""

from coffeeshop.utils.service import CollectionService


class ProductService(CollectionService):
    collection_name = "products"
    label = "Product"
    search_fields = ("name", "description")
