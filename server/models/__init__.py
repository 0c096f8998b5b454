# server/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()


from .user import User  # noqa: E402,F401
from .product import Product  # noqa: E402,F401
from .transaction import Transaction  # noqa: E402,F401
