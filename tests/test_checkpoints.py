import io

import pytest

from tallerkit.checkpoints import (
    ArrayNode,
    add_u32,
    alternate_sum_4,
    alternate_sum_8,
    product_2_f,
    product_9_f,
    str_cmp,
    str_len,
    str_print,
    sub_u32,
    total_length,
)


def test_alternate_sum_4_example():
    assert alternate_sum_4(8, 2, 5, 1) == 10


def test_alternate_sum_4_wraps():
    assert alternate_sum_4(0, 1, 0, 0) == 0xFFFFFFFF


def test_add_and_sub_are_inverse():
    for a, b in [(0, 1), (5, 999), (0xFFFFFFFF, 3), (123456, 654321)]:
        assert sub_u32(add_u32(a, b), b) == a


def test_alternate_sum_8_is_two_sums_of_4():
    xs = [384, 887, 778, 916, 794, 336, 387, 493]
    expected = add_u32(alternate_sum_4(*xs[:4]), alternate_sum_4(*xs[4:]))
    assert alternate_sum_8(*xs) == expected


def test_rejects_negative_input():
    with pytest.raises(ValueError):
        alternate_sum_4(-1, 0, 0, 0)


def test_product_2_f_identity_and_truncation():
    assert product_2_f(742, 1.0) == 742
    assert product_2_f(7, 1.9) == 13


def test_product_2_f_out_of_range():
    with pytest.raises(ValueError):
        product_2_f(5, -1.0)


def test_product_9_f_order_invariant():
    ints = [1] * 9
    floats = [0.5] + [1.0] * 8
    assert product_9_f(ints, floats) == 0.5
    assert product_9_f([3] + [1] * 8, [1.0] * 9) == 3.0


def test_product_9_f_needs_nine():
    with pytest.raises(ValueError):
        product_9_f([1] * 8, [1.0] * 9)


def test_total_length():
    lengths = [12, 3, 0, 7]
    head = None
    for n in reversed(lengths):
        head = ArrayNode(values=[0] * n, next=head)
    assert total_length(head) == sum(lengths)
    assert total_length(None) == 0


def test_array_node_category_byte():
    with pytest.raises(ValueError):
        ArrayNode(category=256)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0), ("sar", 3), ("23", 2), ("taaa", 4), ("tbb", 3), ("tix", 3),
        ("taaab", 5), ("taa0", 4), ("Hola mundo!", 11), ("Astronomo", 9),
        ("Astrognomo", 10), ("Campeones del mundo", 19),
    ],
)
def test_str_len(text, expected):
    assert str_len(text) == expected


def test_str_cmp_equal():
    for s in ["Orga 2!", "Omega 4", "", "Palaven", "Feros"]:
        assert str_cmp(s, s) == 0


def test_str_cmp_ordering():
    assert str_cmp("", "Orga 2!") == 1
    assert str_cmp("Omega 4", "Orga 2!") == 1
    assert str_cmp("Orga 2!", "Orga 3?") == 1
    assert str_cmp("Astrognomo", "Astronomo") == 1
    assert str_cmp("Palaven", "") == -1
    assert str_cmp("Palaven", "Feros") == -1
    assert str_cmp("Astronomo", "Astrognomo") == -1


def test_str_cmp_stress():
    cadenas = ["sar", "23", "taaa", "tbb", "tix", "taaab", "taa0", "tbb", ""]
    resultados = [
        [0, -1, 1, 1, 1, 1, 1, 1, -1],
        [1, 0, 1, 1, 1, 1, 1, 1, -1],
        [-1, -1, 0, 1, 1, 1, -1, 1, -1],
        [-1, -1, -1, 0, 1, -1, -1, 0, -1],
        [-1, -1, -1, -1, 0, -1, -1, -1, -1],
        [-1, -1, -1, 1, 1, 0, -1, 1, -1],
        [-1, -1, 1, 1, 1, 1, 0, 1, -1],
        [-1, -1, -1, 0, 1, -1, -1, 0, -1],
        [1, 1, 1, 1, 1, 1, 1, 1, 0],
    ]
    for a, row in zip(cadenas, resultados):
        for b, expected in zip(cadenas, row):
            assert str_cmp(a, b) == expected, (a, b)


def test_str_print():
    out = io.StringIO()
    str_print("Omega 4", out)
    assert out.getvalue() == "Omega 4"
    empty = io.StringIO()
    str_print("", empty)
    assert empty.getvalue() == "NULL"