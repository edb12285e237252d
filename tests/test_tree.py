import io
import struct

import pytest

from c4.id import identify, parse
from c4.tree import InvalidTreeError, Tree, read_tree

TEST_VECTORS = ["alfa", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel", "india"]
TEST_VECTOR_IDS = [
    [
        "c43zYcLni5LF9rR4Lg4B8h3Jp8SBwjcnyyeh4bc6gTPHndKuKdjUWx1kJPYhZxYt3zV6tQXpDs2shPsPYjgG81wZM1",
        "c42jd8KUQG9DKppN1qt5aWS3PAmdPmNutXyVTb8H123FcuU3shPxpUXsVdcouSALZ4PaDvMYzQSMYCWkb6rop9zhDa",
        "c44erLietE8C1iKmQ3y4ENqA9g82Exdkoxox3KEHops2ux5MTsuMjfbFRvUPsPdi9Pxc3C2MRvLxWT8eFw5XKbRQGw",
        "c42Sv2Wi2Qo8AKbJKnUP6YTSdz8pt9aDaf2Ltx44HF1UDdXANM8Ltk6qEzpncvmVbw6FZxgBumw9Eo2jtGyaQ5gDSC",
        "c41bviGCyTM2stoMYVTVKgBkfC6SitoLRFinp77BcmN9awdaeC9cxPy4zyFQBhmTvRzChawbECK1KBRnw3KnagA5be",
        "c427CsZdfUAHyQBS3hxDFrL9NqgKeRuKkuSkxuYTm26XG7AKAWCjViDuMhHaMmQBkvuHnsxojetbQU1DdxHjzyQw8r",
        "c41yLiwAPdsjiBAAw8AFwQGG3cAWnNbDio21NtHE8yD1Fh5irRE4FsccZvm1WdJ4FNHtR1kt5kev7wERsgYomaQbfs",
        "c44nNyaFuVbt5MCfo2PYWHpwMkBpYTbt14C6TuoLCYH5RLvAFLngER3nqHfXC2GuttcoDxGBi3pY1j3pUF2W3rZD8N",
        "c41nJ6CvPN7m7UkUA3oS2yjXYNSZ7WayxEQXWPae6wFkWwW8WChQWTu61bSeuCERu78BDK1LUEny1qHZnye3oU7DtY",
    ],
    [
        "c42zjM4ARWVNHVkHsaiEWMAxzngUk8op167Dsm1iNpGfxdQBmhwjhWshKRqacPQw3MKwj7kAVxqBwSxADRDKQFAbtu",
        "c45y4hGsfLRcoDpccf7vh8oaEvuFV5UePJmoXWg2W8fr2EqPHLxucBJMmPSXN1wv45okRdjEXkbZn1KzapPwUhYhgz",
        "c41DGFq9sEb7jVmfsvPWnB8R8nENZp1xfoMbS5kK8TkCDpCT28A3wXsAbj8L5ojNLJrENh4UPmrqBCqJvRtG3oeavt",
        "c453g2FnSZnHyUsM95Hs63wVTLmaJLgcB6HULNY7G6xeKggUPsdtN39e9C2qzkoMWKB9gWHVX6aigy1uSzAvyVoS7R",
        "c44nNyaFuVbt5MCfo2PYWHpwMkBpYTbt14C6TuoLCYH5RLvAFLngER3nqHfXC2GuttcoDxGBi3pY1j3pUF2W3rZD8N",
    ],
    [
        "c42WxVx7sogq4LSuxxbzzytXztB3GMwiqfsEPyghJnR5QYVoJ7rVu2yDTpzKTS63eEn2bH4ouhkb1CUTqNfu8RepgB",
        "c45b6ZA4eu1PoCmeYXncTNGAD47sqJPoN1kMgSBsFgXQB9pwRr6u8a6hDWsBbB5x78ZENb5GsnmGejDcCo7aZ4SAsz",
        "c44nNyaFuVbt5MCfo2PYWHpwMkBpYTbt14C6TuoLCYH5RLvAFLngER3nqHfXC2GuttcoDxGBi3pY1j3pUF2W3rZD8N",
    ],
    [
        "c449rzjCF2bwgbWkHLWRRNNQsjxMu36ee6hU3gMr3PxX8zSPpwWZkYp27zgtgFpuBCajMtfYA6PzSmGpRJYLT6pqa5",
        "c44nNyaFuVbt5MCfo2PYWHpwMkBpYTbt14C6TuoLCYH5RLvAFLngER3nqHfXC2GuttcoDxGBi3pY1j3pUF2W3rZD8N",
    ],
    [
        "c435RzTWWsjWD1Fi7dxS3idJ7vFgPVR96oE95RfDDT5ue7hRSPENePDjPDJdnV46g7emDzWK8LzJUjGESMG5qzuXqq",
    ],
]


def _vector_tree():
    return Tree(identify(word.encode()) for word in TEST_VECTORS)


def _expected_rows():
    rows = [list(row) for row in reversed(TEST_VECTOR_IDS)]
    rows[-1] = sorted(rows[-1])
    return rows


def test_tree_rows():
    rows = _vector_tree().rows()
    assert [[str(i) for i in row] for row in rows] == _expected_rows()


def test_tree_id():
    assert str(_vector_tree().id()) == TEST_VECTOR_IDS[-1][0]


def test_tree_string():
    expected = "".join("".join(row) for row in _expected_rows())
    assert str(_vector_tree()) == expected


def test_tree_sorts_its_input():
    ids = [identify(word.encode()) for word in TEST_VECTORS]
    assert Tree(reversed(ids)).id() == Tree(sorted(ids)).id()


def test_tree_length():
    assert len(_vector_tree()) == len(TEST_VECTORS)


@pytest.mark.parametrize("count", range(3, 30))
def test_small_trees(count):
    ids = [identify(bytes([i])) for i in range(count)]
    tree = Tree(ids)
    assert len(tree) == count
    assert [str(i) for i in tree.rows()[-1]] == sorted(str(i) for i in ids)


def test_tree_encoding_round_trip():
    pool = [identify(struct.pack("<i", i)) for i in range(1023)]
    nil_id = identify(b"")
    assert all(not item.is_nil() and item != nil_id for item in pool)
    for length in range(3, 1024):
        tree = Tree(pool[:length])
        tree2 = read_tree(io.BytesIO(tree.to_bytes()))
        assert tree.id() == tree2.id()
        assert len(tree2) == length
        assert tree2.id() == tree.id()


def test_read_tree_too_short():
    with pytest.raises(InvalidTreeError):
        read_tree(io.BytesIO(b"\x01" * 100))


def test_read_tree_bad_root():
    data = bytearray(_vector_tree().to_bytes())
    data[0] ^= 0xFF
    with pytest.raises(InvalidTreeError):
        read_tree(io.BytesIO(bytes(data)))


def test_read_tree_ragged_length():
    data = _vector_tree().to_bytes() + b"\x00" * 10
    with pytest.raises(InvalidTreeError):
        read_tree(io.BytesIO(data))


def test_read_tree_of_two():
    ids = [parse(TEST_VECTOR_IDS[0][0]), parse(TEST_VECTOR_IDS[0][1])]
    tree = read_tree(io.BytesIO(Tree(ids).to_bytes()))
    assert tree.id() == ids[0].sum(ids[1])
    assert len(tree) == 2