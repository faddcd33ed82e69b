# Models package
from inventory_hub.models.user import User
from inventory_hub.models.inventory import Inventory
from inventory_hub.models.item import Item
