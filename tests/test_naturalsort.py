import random

import pytest

from c4.naturalsort import natural_less, natural_sorted


def _shuffled(fmt, size):
    items = [fmt % i for i in range(size)]
    random.shuffle(items)
    return items


def test_basics():
    assert natural_sorted(_shuffled("%04d", 22)) == ["%04d" % i for i in range(22)]


@pytest.mark.parametrize(
    "s1,s2,less",
    [
        ("0", "00", True),
        ("00", "0", False),
        ("aa", "ab", True),
        ("ab", "abc", True),
        ("abc", "ad", True),
        ("ab1", "ab2", True),
        ("ab1c", "ab1c", False),
        ("ab12", "abc", True),
        ("ab2a", "ab10", True),
        ("a0001", "a0000001", True),
        ("a10", "abcdefgh2", True),
        ("аб2аб", "аб10аб", True),
        ("2аб", "3аб", True),
        ("a1b", "a01b", True),
        ("a01b", "a1b", False),
        ("ab01b", "ab010b", True),
        ("ab010b", "ab01b", False),
        ("a01b001", "a001b01", True),
        ("a001b01", "a01b001", False),
        ("a1", "a1x", True),
        ("1ax", "1b", True),
        ("1b", "1ax", False),
        ("082", "83", True),
        ("083a", "9a", False),
        ("9a", "083a", True),
    ],
)
def test_less(s1, s2, less):
    assert natural_less(s1, s2) is less


def test_natural_sort():
    fmt = "foo_%06d_bar.baz"
    assert natural_sorted(_shuffled(fmt, 100)) == [fmt % i for i in range(100)]


@pytest.mark.parametrize(
    "fmt,count,lexical_matches,fields",
    [
        ("%d", 23, False, 1),
        ("filename.%d.ext", 23, False, 1),
        ("filename.%04d.ext", 23, True, 1),
        ("filename%d.ext", 23, False, 1),
        ("filename %d", 23, False, 1),
        ("filename %d .3 .ext", 23, False, 1),
        ("filename-3123_%d.ext", 23, False, 1),
        ("filename-%d_%d.ext", 23, False, 2),
    ],
)
def test_strings(fmt, count, lexical_matches, fields):
    if fields == 1:
        natural = [fmt % i for i in range(count)]
    else:
        natural = [fmt % (j, i) for j in range(3) for i in range(count)]
    lexical = sorted(natural)
    assert (lexical == natural) is lexical_matches
    assert natural_sorted(lexical) == natural


def test_sorted_returns_new_list():
    items = ["b2", "b10", "a"]
    result = natural_sorted(items)
    assert result == ["a", "b2", "b10"]
    assert items == ["b2", "b10", "a"]