# Import models so that SQLAlchemy metadata includes them on app startup
from .product_status import ProductStatus  # noqa: F401
from .brand import Brand  # noqa: F401
from .department import Department  # noqa: F401
from .product import Product, product_categories  # noqa: F401
from .category import Category  # noqa: F401
from .product_model import ProductModel  # noqa: F401
from .option import Option  # noqa: F401
from .stock import Stock  # noqa: F401
from .product_discount import ProductDiscount  # noqa: F401
from .coupon import Coupon  # noqa: F401
from .reference import Reference, ReferenceProduct  # noqa: F401
from .product_ui import ProductUi, ProductUiFile  # noqa: F401
from .cart_item import CartItem  # noqa: F401
from .order import Order  # noqa: F401
from .order_detail import OrderDetail  # noqa: F401
