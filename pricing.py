import math

HOURLY_RATE = 198
DAY_PRICE = 999
NIGHT_PRICE = 1499

CONTROLLER_HOURLY_RATE = 39
CONTROLLER_DAY_PRICE = 199
CONTROLLER_NIGHT_PRICE = 299

DEFAULT_HOURS = 2

CITY_DELIVERY_PRICES = {"Neemuch": 199, "Pratapgarh": 199, "Mandsaur": 99}
DEFAULT_DELIVERY_CHARGE = 99

COUPON_CODE = "leazo"
# Cities with their own (smaller) coupon rates; hourly bookings get nothing there.
COUPON_LOCAL_CITIES = {"Pratapgarh", "Neemuch"}
COUPON_LOCAL_DISCOUNTS = {"day": 400, "night": 700}
COUPON_DISCOUNTS = {"day": 500, "night": 800}
COUPON_HOURLY_SHARE = 0.5

UPI_DISCOUNT_RATE = 0.05


def _number(value):
    """Return ints for integral values so receipts never show ``594.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _coerce_price(value) -> float:
    if not value:
        return 0
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(price):
        return 0
    return _number(price)


def _coerce_hours(value) -> int:
    if not value or isinstance(value, bool):
        return DEFAULT_HOURS
    try:
        hours = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_HOURS
    if hours <= 0 or hours != float(value):
        return DEFAULT_HOURS
    return hours


def _round_half_up(value) -> int:
    return int(math.floor(value + 0.5))


def plan_price(plan: str, hours: int):
    if plan == "hourly":
        return HOURLY_RATE * hours
    if plan == "day":
        return DAY_PRICE
    if plan == "night":
        return NIGHT_PRICE
    return 0


def controller_charge(plan: str, hours: int):
    if plan == "hourly":
        return CONTROLLER_HOURLY_RATE * hours
    if plan == "day":
        return CONTROLLER_DAY_PRICE
    if plan == "night":
        return CONTROLLER_NIGHT_PRICE
    return 0


def delivery_charge(city) -> int:
    return CITY_DELIVERY_PRICES.get(city, DEFAULT_DELIVERY_CHARGE)


def price_games(games):
    """Charge every game except the most expensive one.

    Games are sorted by price descending; ``sorted`` is stable, so among games
    with the same top price the one listed first by the customer is free.
    Returns ``(game_total, breakdown)``.
    """
    if not isinstance(games, list):
        games = []

    normalized = []
    for game in games:
        if not isinstance(game, dict):
            continue
        normalized.append({"name": game.get("name"), "price": _coerce_price(game.get("price"))})

    normalized.sort(key=lambda item: item["price"], reverse=True)

    game_total = 0
    breakdown = []
    for index, game in enumerate(normalized):
        free = index == 0
        if not free:
            game_total += game["price"]
        breakdown.append({"name": game["name"], "price": game["price"], "free": free})
    return _number(game_total), breakdown


def coupon_discount(coupon, city, plan: str, base_price):
    if str(coupon or "").lower() != COUPON_CODE:
        return 0
    if city in COUPON_LOCAL_CITIES:
        return COUPON_LOCAL_DISCOUNTS.get(plan, 0)
    if plan == "hourly":
        return _number(COUPON_HOURLY_SHARE * base_price)
    return COUPON_DISCOUNTS.get(plan, 0)


def upi_discount(payment_method, amount) -> int:
    if (payment_method or "cod") != "upi":
        return 0
    return _round_half_up(amount * UPI_DISCOUNT_RATE)


def compute_total(payload: dict) -> dict:
    """Price a booking request.

    Discounts compound: the coupon comes off the subtotal, then the UPI
    discount is taken from what is left. Neither step can push the amount
    below zero.
    """
    plan = payload.get("plan")
    if not isinstance(plan, str):
        plan = ""
    hours = _coerce_hours(payload.get("hours"))
    city = payload.get("city")
    if not isinstance(city, str):
        city = ""

    base_price = plan_price(plan, hours)
    game_total, game_breakdown = price_games(payload.get("games"))
    controller = controller_charge(plan, hours) if payload.get("addController") else 0
    delivery = delivery_charge(city)

    subtotal = base_price + controller + game_total + delivery
    coupon = coupon_discount(payload.get("coupon"), city, plan, base_price)
    after_coupon = max(subtotal - coupon, 0)
    upi = upi_discount(payload.get("paymentMethod"), after_coupon)
    total = max(after_coupon - upi, 0)

    return {
        "planPrice": base_price,
        "controllerCharge": controller,
        "gameTotal": game_total,
        "deliveryCharge": delivery,
        "couponDiscount": coupon,
        "upiDiscount": upi,
        "total": _number(total),
        "gameBreakdown": game_breakdown,
    }
