import itertools
from types import SimpleNamespace

from checkout_integration.models import LineItem
from checkout_integration.weight import estimate_weight


def test_front_or_rear_position_weighs_five_per_unit():
    assert estimate_weight([LineItem(position="FRONT-LEFT", quantity=2)]) == 10
    assert estimate_weight([LineItem(position="REAR", quantity=1)]) == 5


def test_full_set_weighs_ten():
    assert estimate_weight([LineItem(position="1SET", quantity=1)]) == 10


def test_sport_spring_weighs_eight():
    assert estimate_weight([LineItem(position="X", type="Sport Spring", quantity=3)]) == 24


def test_unknown_item_falls_to_default():
    assert estimate_weight([LineItem(position="X", type="Other", quantity=1)]) == 5


def test_position_rule_wins_over_type():
    # FRONT is checked before the Sport Spring type
    item = LineItem(position="FRONT", type="Sport Spring", quantity=1)
    assert estimate_weight([item]) == 5
    # 1SET in the position also beats the type
    assert estimate_weight([LineItem(position="1SET", type="Sport Spring", quantity=2)]) == 20


def test_missing_tags_do_not_raise():
    assert estimate_weight([LineItem(quantity=4)]) == 20
    odd = SimpleNamespace(position=None, type=42, quantity=1)
    assert estimate_weight([odd]) == 5


def test_empty_items():
    assert estimate_weight([]) == 0


def test_weight_independent_of_item_order():
    items = [
        LineItem(position="FRONT", quantity=1),
        LineItem(position="1SET", quantity=2),
        LineItem(position="X", type="Sport Spring", quantity=1),
        LineItem(type="Bush", quantity=3),
    ]
    weights = {estimate_weight(list(p)) for p in itertools.permutations(items)}
    assert weights == {5 + 20 + 8 + 15}
