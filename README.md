# marketcore

Business rules for a multi-vendor marketplace, as a plain Python library.

marketcore holds the logic that sits between a web layer and storage:
commission calculation, splitting a cart into per-vendor sub-orders,
promotion discounts, product and vendor validation and review workflows.
Repositories and the cache are passed in to the services, so they can be
backed by whatever storage you use.

## Install

```
pip install .
pip install ".[test]"   # adds pytest
```

Python 3.10 or later. The only runtime dependency is `bcrypt`.

## Modules

- **`marketcore.models`**: dataclass records (`Product`, `ProductImage`,
  `ProductVariant`, `Category`, `Vendor`, `VendorBankDetails`, `VendorWallet`,
  `OrderItem`, `CartItem`, `Order`, `SubOrder`, `Promotion`) and the errors
  `ServiceError`, `ValidationError` and `NotFoundError`. `Product`, `Category`,
  `Vendor` and `Promotion` have `to_dict()` / `from_dict()`; times become ISO
  strings and are parsed back.
- **`marketcore.commission`**: `CommissionService.calculate_commission(order_item,
  vendor_commission_model, vendor_commission_rate)` returns
  `(amount, CommissionConfig)`. The category's commission wins if the product
  has a category whose model and rate are set. Otherwise the vendor's model and
  rate are used if the model is non-empty. Otherwise the platform default
  applies: `margin` at 0.05. Formulas: `margin` is `subtotal × rate`; `markup`
  is `subtotal / (1 + rate) × (1 − 1 / (1 + rate))`; any other model name uses
  the margin formula. A `None` order item raises `ValidationError`.
  `validate_commission_rate(rate, model)` raises `ValidationError` outside
  `[0, 1]`. `get_category_commission(category_id)` reads a category's settings
  and treats a missing rate as 0.
- **`marketcore.orders`**: `OrderService`.
  - `split_order(order, cart_items)` groups items by the product's vendor and
    returns one `SubOrder` (status `"pending"`) per vendor, with subtotal,
    commission and vendor earning. It adds the sub-order subtotals to
    `order.subtotal` and sets `order.grand_total = subtotal − discount_total +
    shipping_total`. A missing order, an empty cart or an item without a
    product raises `ValidationError`; a vendor the repository cannot find
    raises `NotFoundError`.
  - `validate_stock(cart_items)` raises `ValidationError` for the first item
    with no variant or too little stock.
  - `apply_promotions(order, promo_codes)` sums the discounts: `percent`
    promotions take `discount_value` percent of `order.subtotal`, any other
    type is a flat `discount_value`. Promotions are looked up in the cache
    under `promo:<code>` first and cached for an hour after a repository
    lookup. An unknown code raises `NotFoundError`.
  - `get_order_by_id` and `list_orders` pass through to the order repository.
- **`marketcore.products`**: `ProductService`. `validate_product` checks a name
  of 3–255 bytes, non-zero vendor and category ids, a positive base price, a
  cost price that is non-negative and below the base price, and a positive
  return window for returnable products. `create_product` validates and stores
  the product as `"draft"`; `update_product` validates and moves a
  `"published"` product to `"pending_approval"`. `approve_product` sets
  `"published"`, `reject_product` sets `"rejected"`. `get_product_by_id`,
  `get_product_by_slug` (5 minutes) and `get_categories` (24 hours) read
  through the cache. `list_products` searches when a search string is given and
  otherwise lists active products.
- **`marketcore.vendors`**: `VendorService`. `validate_vendor` requires a user
  id, a store name of at least 3 bytes, a slug, a commission model of `margin`
  or `markup` and a rate in `[0, 1]`. `approve_vendor`, `reject_vendor` and
  `suspend_vendor` set the status. `can_list_products` returns `True` for an
  approved vendor that has accepted the agreement and raises
  `ValidationError` saying why otherwise. Also `get_vendor_by_id` (cached for
  an hour), `list_vendors`, `get_vendor_wallet` and `update_bank_details`.
- **`marketcore.jsonloader`**: `JSONLoader(path)` reads a
  `{"products": [...]}` file (relative paths are taken from the working
  directory) into `ProductData` entries; the price is read from the `price`
  key. `ProductData.to_model()` gives a `Product`. Read or decode failures
  raise `LoaderError`.
- **`marketcore.jsonrepo`**: `JSONProductRepository(loader)` serves read-only,
  paginated queries, each returning `(products, total)`: `list` (active
  products, optionally of one category), `list_by_vendor` (active and draft),
  `list_by_vendor_and_status`, `search_products` (name, description or SKU,
  case-insensitive, active only) and `list_pending_approval` (drafts). Writes
  and `get_category` raise `UnsupportedOperationError`; `list_categories`
  returns an empty list.
- **`marketcore.cache`**: `CacheManager(client)` stores JSON values, strings,
  hashes and counters through a redis-py style client (`set`, `get`, `delete`,
  `exists`, `hset`, `hgetall`, `incrby`). A miss or a failure raises
  `CacheError`; with no client every call raises `CacheError`. The services
  swallow cache errors, so `CacheManager()` with no client simply turns
  caching off.
- **`marketcore.pagination`**: `get_pagination_params(query)` reads `page`,
  `pageSize` (default 20, capped at 100) and `sort` from a mapping;
  `PaginationParams.offset()`, `paginate(params, items)` and
  `calculate_pagination_meta(total, page, page_size)`.
- **`marketcore.responses`**: response envelopes (`APIResponse`,
  `PaginatedResponse`, `PaginationMeta`) and helpers such as
  `success_response`, `error_response`, `bad_request` and `not_found`, which
  return `(status_code, body_dict)`.
- **`marketcore.passwords`**: `hash_password` (bcrypt, cost 12; more than 72
  bytes raises `ValueError`) and `verify_password`.

## Repositories

The services take any objects with the methods they call:

- product repository: `get_by_id`, `get_by_slug`, `list`, `search_products`,
  `list_by_vendor`, `list_pending_approval`, `create`, `update`,
  `update_status`, `list_categories`, `get_category`;
- vendor repository: `get_by_id`, `list`, `update_status`, `get_wallet`,
  `update_bank_details`;
- order repository: `get_order_by_id`, `list_all_orders`;
- promotion repository: `get_by_code`.

A record that does not exist should be reported by raising `NotFoundError`
(or another `ServiceError` or `LookupError`); the commission and order logic
treat those as "not found" and fall back or report accordingly.
`JSONProductRepository` can serve as the product repository for reads.

## Examples

Commission for a line with no category or vendor settings:

```python
from marketcore.commission import CommissionService
from marketcore.models import OrderItem

service = CommissionService(product_repo=None)
amount, config = service.calculate_commission(
    OrderItem(unit_price=100.0, quantity=2), "", 0.0
)
# amount == 10.0, config.commission_model == "margin", config.commission_rate == 0.05
```

Pagination:

```python
from marketcore.pagination import calculate_pagination_meta, get_pagination_params

params = get_pagination_params({"page": "2", "pageSize": "500"})
# params.page == 2, params.page_size == 100, params.offset() == 100
meta = calculate_pagination_meta(45, 1, 20)
# meta.total_pages == 3
```

Passwords:

```python
from marketcore.passwords import hash_password, verify_password

hashed = hash_password("password")
assert verify_password(hashed, "password")
```

## What it does not do

marketcore is a library only. It has no command-line tool, no HTTP server or
routes, and no database-backed repositories: apart from the read-only JSON
catalogue, you supply the storage. It does not issue or check login tokens,
register or log in users, or upload files; `VendorService` accepts a storage
object but does not use it. Promotions are not checked for expiry or usage
limits: any promotion the repository returns is applied.