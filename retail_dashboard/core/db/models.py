# Import all models here so Base.metadata knows every table
# and relationship strings resolve regardless of import order.

from retail_dashboard.core.db.base import Base, BaseModel
from retail_dashboard.modules.organizations.models import Organization
from retail_dashboard.modules.profiles.models import Profile
from retail_dashboard.modules.locations.models import Location
from retail_dashboard.modules.products.models import Product
from retail_dashboard.modules.inventory.models import Inventory
from retail_dashboard.modules.sales.models import Sale, SaleItem

# Export for easy importing
__all__ = [
    "Base",
    "BaseModel",
    "Organization",
    "Profile",
    "Location",
    "Product",
    "Inventory",
    "Sale",
    "SaleItem",
]
