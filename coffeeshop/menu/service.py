from coffeeshop.utils.service import CollectionService


class MenuService(CollectionService):
    collection_name = "menu_items"
    label = "Menu item"
    search_fields = ("name", "type")
