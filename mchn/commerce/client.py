"""Commerce client: create, fetch and delete commerce records in MCHN.

Every convenience method maps onto one of four generic operations,
``get_object``, ``get_objects``, ``build_object`` and ``remove_object``::

    client = CommerceClient("shared", "private")
    response = client.get_order(14)
    response.data["data"]["price"]

    client.get_orders(limit=20)
    while client.has_next_page():
        client.get_next_page()

URL parameters are passed as keyword arguments; see api.mchn.io/docs for the
parameters each endpoint supports.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from .._core._models import DELETE, GET, POST, ApiResponse, RequestSpec
from ..client import MchnClient
from ..exceptions import ResourceNotSupported
from ..routing import resolve_collection, resolve_segment
from ..validation import ValidationResult, validate_id, validate_present
from .options import (
    BuildOptions,
    DeleteOptions,
    GetOptions,
    ListOptions,
    render_query_params,
)

logger = logging.getLogger(__name__)

Response = Optional[ApiResponse]


def _invalid(name: str, operation: str) -> str:
    return f"Missing or Invalid '{name}' in CommerceClient.{operation}()."


def _resolve_type(
    resource_type: Any,
    operation: str,
    result: ValidationResult,
    resolve: Callable[[str], str] = resolve_segment,
) -> Optional[str]:
    try:
        return resolve(resource_type)
    except ResourceNotSupported:
        result.add_error("type", _invalid("type", operation), value=resource_type)
        return None


def _build(resource_type: str, doc: str) -> Callable[..., Response]:
    def build(self: CommerceClient, data: Mapping[str, Any]) -> Response:
        return self.build_object(BuildOptions(type=resource_type, data=data))

    build.__doc__ = doc
    return build


def _delete(resource_type: str, doc: str) -> Callable[..., Response]:
    def delete(self: CommerceClient, object_id: Any) -> Response:
        return self.remove_object(DeleteOptions(type=resource_type, id=object_id))

    delete.__doc__ = doc
    return delete


def _get_one(resource_type: str, doc: str) -> Callable[..., Response]:
    def get(self: CommerceClient, object_id: Any) -> Response:
        return self.get_object(GetOptions(type=resource_type, id=object_id))

    get.__doc__ = doc
    return get


def _get_many(
    collection: str, doc: str, auxiliary: Optional[str] = None
) -> Callable[..., Response]:
    def get(self: CommerceClient, **params: Any) -> Response:
        return self.get_objects(
            ListOptions(type=collection, auxiliary=auxiliary, params=params)
        )

    get.__doc__ = doc
    return get


def _get_nested(collection: str, sub_resource: str, doc: str) -> Callable[..., Response]:
    def get(self: CommerceClient, object_id: Any, **params: Any) -> Response:
        return self.get_objects(
            ListOptions(
                type=collection, id=object_id, sub_resource=sub_resource, params=params
            )
        )

    get.__doc__ = doc
    return get


def _get_nested_country(
    collection: str, sub_resource: str, doc: str
) -> Callable[..., Response]:
    def get(self: CommerceClient, object_id: Any, country: str, **params: Any) -> Response:
        return self.get_objects(
            ListOptions(
                type=collection,
                id=object_id,
                sub_resource=sub_resource,
                secondary_id=country,
                params=params,
            )
        )

    get.__doc__ = doc
    return get


class CommerceClient(MchnClient):
    """Client for the commerce endpoints of the MCHN API."""

    provider_name = "Commerce Client"

    def get_object(self, options: GetOptions) -> Response:
        """Fetch a single object by type and ID.

        Returns:
            The response, or ``None`` if the options are invalid.
        """
        result = ValidationResult()
        validate_id(options.id, "id", _invalid("id", "get_object"), result)
        segment = _resolve_type(options.type, "get_object", result)
        if not result.is_valid:
            return self._reject(result)

        return self._execute(RequestSpec(method=GET, path=f"{segment}/{options.id}"))

    def get_objects(self, options: ListOptions) -> Response:
        """Fetch a collection, optionally nested under a parent object.

        Returns:
            The response, or ``None`` if the options are invalid.
        """
        result = ValidationResult()
        segment = _resolve_type(
            options.type, "get_objects", result, resolve=resolve_collection
        )

        nested = bool(options.sub_resource) or bool(options.id)
        if nested:
            if not options.sub_resource:
                result.add_error("getType", _invalid("getType", "get_objects"))
            elif not options.id:
                result.add_error("id", _invalid("id", "get_objects"), value=options.id)
        if not result.is_valid:
            return self._reject(result)

        path = str(segment)
        if nested:
            path += f"/{options.id}/{options.sub_resource}"
            if options.secondary_id:
                path += f"/{options.secondary_id}"
        if options.auxiliary:
            path += f"/{options.auxiliary}"

        return self._execute(
            RequestSpec(
                method=GET,
                path=path,
                query_params=render_query_params(options.params),
            )
        )

    def build_object(self, options: BuildOptions) -> Response:
        """Create an object from ``options.data``.

        Returns:
            The response, or ``None`` if the options are invalid.
        """
        result = ValidationResult()
        data = options.data
        if not isinstance(data, Mapping) or not data:
            result.add_error("data", _invalid("data", "build_object"), value=data)
            data = {}
        segment = _resolve_type(options.type, "build_object", result)

        body = dict(data)
        parent_id = options.parent_id
        if parent_id is None:
            # stays in the body as well; only the path is derived from it
            parent_id = body.get("parentID")
        if parent_id and (isinstance(parent_id, bool) or not isinstance(parent_id, int)):
            result.add_error(
                "parentID", _invalid("parentID", "build_object"), value=parent_id
            )
        if not result.is_valid:
            return self._reject(result)

        path = f"{segment}/{parent_id or ''}"
        return self._execute(RequestSpec(method=POST, path=path, body=body))

    def remove_object(self, options: DeleteOptions) -> Response:
        """Delete an object by type and ID.

        Returns:
            The response, or ``None`` if the options are invalid.
        """
        result = ValidationResult()
        validate_present(options.id, "ID", _invalid("ID", "remove_object"), result)
        segment = _resolve_type(options.type, "remove_object", result)
        if not result.is_valid:
            return self._reject(result)

        return self._execute(RequestSpec(method=DELETE, path=f"{segment}/{options.id}"))

    def build_child_product(
        self, data: Mapping[str, Any], parent_id: Any = None
    ) -> Response:
        """Create a child product (variant) of ``parent_id``, or of ``data["parentID"]``."""
        return self.build_object(
            BuildOptions(type="product", data=data, parent_id=parent_id)
        )

    build_address = _build("address", "Create an address record.")
    build_article_category = _build("articleCategory", "Create an article category.")
    build_product_category = _build("productCategory", "Create a product category.")
    build_order = _build("order", "Create an order.")
    build_order_status = _build("orderStatus", "Create an order status change.")
    build_price = _build("price", "Create a price for a product.")
    build_shipping_price = _build(
        "shippingPrice", "Create a shipping price for a product."
    )
    build_inventory = _build("inventory", "Create an inventory record.")
    build_product = _build("product", "Create a product.")
    build_payment = _build("payment", "Create a payment record.")
    build_shipment = _build("shipment", "Create a shipment record.")

    delete_price = _delete("price", "Delete a price by ID.")
    delete_shipping_price = _delete("shippingPrice", "Delete a shipping price by ID.")

    get_account = _get_one("account", "Get an account by ID.")
    get_address = _get_one("address", "Get an address by ID.")
    get_article = _get_one("article", "Get an article by ID.")
    get_article_category = _get_one("articleCategory", "Get an article category by ID.")
    get_order = _get_one("order", "Get an order by ID.")
    get_order_payment = _get_one("orderPayment", "Get an order payment by ID.")
    get_inventory = _get_one("inventory", "Get an inventory record by ID.")
    get_order_status = _get_one("orderStatus", "Get an order status by ID.")
    get_payment = _get_one("payment", "Get a payment by ID.")
    get_product = _get_one("product", "Get a product by ID.")
    get_product_category = _get_one("productCategory", "Get a product category by ID.")
    get_price = _get_one("price", "Get a price by ID.")
    get_shipping_price = _get_one("shippingPrice", "Get a shipping price by ID.")
    get_shipment = _get_one("shipment", "Get a shipment by ID.")

    get_accounts = _get_many("accounts", "List accounts.")
    get_addresses = _get_many("addresses", "List addresses.")
    get_articles = _get_many("articles", "List articles.")
    get_article_categories = _get_many("articleCategories", "List article categories.")
    get_orders = _get_many("orders", "List orders.")
    get_inventories = _get_many("inventories", "List inventory records.")
    get_order_payments = _get_many("orderPayments", "List order payments.")
    get_order_statuses = _get_many("orderStatuses", "List order statuses.")
    get_payments = _get_many("payments", "List payments.")
    get_product_categories = _get_many("productCategories", "List product categories.")
    get_products = _get_many("products", "List products.")
    get_prices = _get_many("prices", "List prices.")
    get_shipping_prices = _get_many("shippingPrices", "List shipping prices.")
    get_shipments = _get_many("shipments", "List shipments.")
    get_products_count = _get_many("products", "Count all products.", auxiliary="count")

    get_order_payments_by_order_id = _get_nested(
        "orders", "payments", "List the payments of an order."
    )
    get_order_shipments = _get_nested(
        "orders", "shipments", "List the shipments of an order."
    )
    get_order_statuses_by_order_id = _get_nested(
        "orders", "statuses", "List the statuses of an order."
    )
    get_payments_voided = _get_nested(
        "payments", "voidedPayments", "List the payments voiding a payment."
    )
    get_order_payments_payments = _get_nested(
        "orderPayments", "payments", "List the payment records of an order payment."
    )
    get_product_categories_by_product_id = _get_nested(
        "products", "productCategories", "List the categories of a product."
    )
    get_product_prices = _get_nested(
        "products", "prices", "List the prices of a product."
    )
    get_product_price_country = _get_nested_country(
        "products", "prices", "Get the price of a product in a country, e.g. 'CA'."
    )
    get_product_shipping_prices = _get_nested(
        "products", "shippingPrices", "List the shipping prices of a product."
    )
    get_product_shipping_price_country = _get_nested_country(
        "products",
        "shippingPrices",
        "Get the shipping price of a product to a country, e.g. 'CA'.",
    )
