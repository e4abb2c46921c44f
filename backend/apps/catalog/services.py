from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from apps.api.exceptions import NOT_FOUND, ApplicationError
from apps.auth.identity import Identity, require_admin
from apps.common import get_logger
from .commands import ProductCreateCommand, ProductUpdateCommand
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        # Caching keys
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def _bump_cache_version(self) -> None:
        if self.disable_cache:
            return
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v + 1)

    def _cache_key(self) -> str:
        return f"{self._cache_prefix}:v{self._get_cache_version()}"

    def _require_product(self, product_id: int):
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            raise ApplicationError(
                NOT_FOUND, "Product not found", details={"id": str(product_id)}
            )
        return product

    def list_products(self) -> List[ProductDTO]:
        self.logger.debug("Listing products", cache_enabled=not self.disable_cache)
        if self.disable_cache:
            return ProductMapper.many_to_dto(self.products.list())
        key = self._cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = ProductMapper.many_to_dto(self.products.list())
        self.cache.set(key, data)
        return data

    def find_product(self, product_id: int) -> Optional[ProductDTO]:
        product = self.products.get(id=product_id)
        return ProductMapper.to_dto(product) if product else None

    def get_product(self, product_id: int) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        return ProductMapper.to_dto(self._require_product(product_id))

    def create_product(
        self,
        actor: Optional[Identity],
        data: Union[Dict[str, Any], ProductCreateCommand],
    ) -> ProductDTO:
        actor = require_admin(actor)
        cmd = (
            data
            if isinstance(data, ProductCreateCommand)
            else ProductCreateCommand.from_raw(data)
        )
        self.logger.info("Creating product", name=cmd.name, actor_id=actor.id)
        product = self.products.create(
            name=cmd.name,
            price=cmd.price,
            description=cmd.description,
            imagen=cmd.imagen,
        )
        self._bump_cache_version()
        self.logger.info("Product created", product_id=product.id)
        return ProductMapper.to_dto(product)

    def update_product(
        self,
        actor: Optional[Identity],
        product_id: int,
        data: Union[Dict[str, Any], ProductUpdateCommand],
    ) -> ProductDTO:
        actor = require_admin(actor)
        cmd = (
            data
            if isinstance(data, ProductUpdateCommand)
            else ProductUpdateCommand.from_raw(product_id, data)
        )
        self.logger.info("Updating product", product_id=product_id, actor_id=actor.id)
        product = self._require_product(product_id)
        changes = cmd.changes()
        if changes:
            product = self.products.update(product, **changes)
            self._bump_cache_version()
        self.logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return ProductMapper.to_dto(product)

    def delete_product(self, actor: Optional[Identity], product_id: int) -> None:
        actor = require_admin(actor)
        self.logger.info("Deleting product", product_id=product_id, actor_id=actor.id)
        product = self._require_product(product_id)
        self.products.delete(product)
        self._bump_cache_version()
        self.logger.info("Product deleted", product_id=product_id)
