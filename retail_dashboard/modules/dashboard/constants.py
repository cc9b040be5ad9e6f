"""Fixed dashboard thresholds and list sizes."""

# Inventory rows strictly below this quantity are low stock
LOW_STOCK_THRESHOLD = 10

LOW_STOCK_LIMIT = 10

RECENT_SALES_LIMIT = 5

DEFAULT_CUSTOMER_NAME = "Venta directa"

# Names of the concurrent reads, also reported back in DashboardResponse.unavailable
READ_TOTAL_PRODUCTS = "total_products"
READ_TOTAL_STOCK = "total_stock"
READ_SALES_TODAY = "sales_today"
READ_LOW_STOCK = "low_stock"
READ_RECENT_SALES = "recent_sales"
