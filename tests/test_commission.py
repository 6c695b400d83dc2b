import pytest

from marketcore.commission import CommissionConfig, CommissionService
from marketcore.models import Category, NotFoundError, OrderItem, Product, ValidationError


class FakeProductRepo:
    def __init__(self, categories=None):
        self.categories = dict(categories or {})
        self.category_calls = []

    def get_category(self, category_id):
        self.category_calls.append(category_id)
        try:
            return self.categories[category_id]
        except KeyError:
            raise NotFoundError("not found") from None


def make_service(categories=None):
    repo = FakeProductRepo(categories)
    return CommissionService(repo), repo


def item_with_category(category_id, unit, qty):
    return OrderItem(id=1, unit_price=unit, quantity=qty, product=Product(category_id=category_id))


def test_category_commission():
    svc, repo = make_service({1: Category(id=1, commission_model="margin", commission_rate=0.1)})
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "margin", 0.05)
    assert commission == pytest.approx(20.0)
    assert config == CommissionConfig("margin", 0.1)
    assert repo.category_calls == [1]


def test_category_overrides_vendor():
    svc, _ = make_service({1: Category(id=1, commission_model="margin", commission_rate=0.20)})
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "markup", 0.30)
    assert commission == pytest.approx(40.0, abs=1e-9)
    assert config.commission_model == "margin"
    assert config.commission_rate == pytest.approx(0.20)


def test_vendor_markup_when_no_category_commission():
    svc, repo = make_service()
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "markup", 0.5)
    assert commission == pytest.approx(44.44, abs=0.01)
    assert config == CommissionConfig("markup", 0.5)
    assert repo.category_calls == [1]


def test_vendor_margin_when_no_category():
    svc, _ = make_service()
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "margin", 0.15)
    assert commission == pytest.approx(30.0, abs=1e-9)
    assert config == CommissionConfig("margin", 0.15)


def test_category_without_rate_falls_back_to_vendor():
    svc, _ = make_service({1: Category(id=1, commission_model="margin", commission_rate=None)})
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "margin", 0.15)
    assert commission == pytest.approx(30.0)
    assert config.commission_rate == pytest.approx(0.15)


def test_platform_default_when_no_vendor_commission():
    svc, _ = make_service()
    commission, config = svc.calculate_commission(item_with_category(1, 100.0, 2), "", 0)
    assert commission == pytest.approx(10.0)
    assert config == CommissionConfig("margin", 0.05)


def test_nil_order_item():
    svc, _ = make_service()
    with pytest.raises(ValidationError, match="order item"):
        svc.calculate_commission(None, "margin", 0.05)


@pytest.mark.parametrize("rate,expected", [(0.05, 10.0), (0.10, 20.0)])
def test_no_product_uses_vendor_rate(rate, expected):
    svc, repo = make_service()
    item = OrderItem(id=1, unit_price=100.0, quantity=2, product=None)
    commission, config = svc.calculate_commission(item, "margin", rate)
    assert commission == pytest.approx(expected)
    assert config.commission_model == "margin"
    assert repo.category_calls == []


def test_margin_formula_over_quantity():
    svc, _ = make_service()
    item = OrderItem(unit_price=100.0, quantity=5)
    commission, _ = svc.calculate_commission(item, "margin", 0.1)
    assert commission == pytest.approx(50.0)


def test_markup_formula_rate_half():
    svc, _ = make_service()
    item = OrderItem(unit_price=100.0, quantity=2)
    commission, _ = svc.calculate_commission(item, "markup", 0.5)
    assert commission == pytest.approx(44.444, abs=0.01)


def test_markup_formula_rate_tenth():
    svc, _ = make_service()
    item = OrderItem(unit_price=100, quantity=1, product=Product())
    commission, _ = svc.calculate_commission(item, "markup", 0.10)
    assert commission == pytest.approx(8.2645, abs=1e-4)


@pytest.mark.parametrize("model", ["unknown", "flat"])
def test_unknown_model_defaults_to_margin(model):
    svc, _ = make_service()
    item = OrderItem(unit_price=100.0, quantity=5, product=Product())
    commission, config = svc.calculate_commission(item, model, 0.1)
    assert commission == pytest.approx(50.0)
    assert config.commission_model == model


@pytest.mark.parametrize("unit,qty", [(100.0, 0), (0.0, 5)])
def test_zero_quantity_or_price_yields_zero(unit, qty):
    svc, _ = make_service()
    commission, _ = svc.calculate_commission(item_with_category(1, unit, qty), "margin", 0.05)
    assert commission == 0.0


def test_large_prices():
    svc, _ = make_service()
    commission, _ = svc.calculate_commission(item_with_category(1, 1000000.0, 100), "margin", 0.05)
    assert commission == 5000000.0


def test_validate_commission_rate_accepts_range_and_rejects_just_outside():
    svc, _ = make_service()
    for rate, model in [(0.0, "margin"), (0.15, "margin"), (0.5, "margin"), (1.0, "margin"),
                        (0.5, "markup"), (1.0, "markup")]:
        svc.validate_commission_rate(rate, model)
    with pytest.raises(ValidationError):
        svc.validate_commission_rate(1.0001, "margin")
    with pytest.raises(ValidationError):
        svc.validate_commission_rate(-0.0001, "markup")


@pytest.mark.parametrize(
    "rate,model",
    [(-0.1, "margin"), (1.1, "margin"), (-0.5, "markup"), (1.5, "markup"),
     (-0.01, "margin"), (1.01, "margin"), (-1.0, "margin"), (5.0, "margin")],
)
def test_validate_commission_rate_invalid(rate, model):
    svc, _ = make_service()
    with pytest.raises(ValidationError, match="between 0 and 1"):
        svc.validate_commission_rate(rate, model)


def test_get_category_commission_success():
    svc, repo = make_service({1: Category(id=1, commission_model="margin", commission_rate=0.15)})
    assert svc.get_category_commission(1) == CommissionConfig("margin", 0.15)
    assert repo.category_calls == [1]


def test_get_category_commission_missing_rate_is_zero():
    svc, _ = make_service({2: Category(id=2, commission_model="markup")})
    assert svc.get_category_commission(2) == CommissionConfig("markup", 0.0)


def test_get_category_commission_not_found():
    svc, repo = make_service()
    with pytest.raises(NotFoundError):
        svc.get_category_commission(999)
    assert repo.category_calls == [999]