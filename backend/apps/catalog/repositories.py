from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    ordering = ("-created_at", "-id")

    def __init__(self):
        super().__init__(Product)
