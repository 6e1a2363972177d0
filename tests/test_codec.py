import pytest
from serde.json import to_json

from bintree.codec import NodeRecord, TreeRecord, decode, decode_dict, dumps, encode, encode_dict, loads
from bintree.similarity import are_similar
from bintree.tree_node import TreeNode


def test_empty_tree() -> None:
    record = encode(None)
    assert record.root is None
    assert record.nodes == []
    assert decode(record) is None
    assert loads(dumps(None)) is None


def test_preorder_table() -> None:
    record = encode(TreeNode(2, TreeNode(1), TreeNode(3, None, TreeNode(4))))
    assert record.root == 0
    assert [n.value for n in record.nodes] == [2, 1, 3, 4]
    assert (record.nodes[0].left, record.nodes[0].right) == (1, 2)
    assert (record.nodes[1].left, record.nodes[1].right) == (None, None)
    assert (record.nodes[2].left, record.nodes[2].right) == (None, 3)


def test_mixed_values_survive_json() -> None:
    tree = TreeNode("m", TreeNode("a"), TreeNode("z"))
    assert are_similar(loads(dumps(tree)), tree)
    tree = TreeNode(1.5, TreeNode(-2), None)
    decoded = loads(dumps(tree))
    assert are_similar(decoded, tree)
    assert isinstance(decoded.left.value, int)


def test_deep_tree_round_trips() -> None:
    root = None
    for value in reversed(range(5000)):
        root = TreeNode(value, None, root)
    decoded = decode_dict(encode_dict(root))
    node, count = decoded, 0
    while node is not None:
        assert node.value == count
        node, count = node.right, count + 1
    assert count == 5000


def test_dangling_index() -> None:
    record = TreeRecord(0, [NodeRecord(1, 5, None)])
    with pytest.raises(ValueError):
        decode(record)


def test_node_with_two_parents() -> None:
    record = TreeRecord(0, [NodeRecord(1, 1, 1), NodeRecord(2, None, None)])
    with pytest.raises(ValueError):
        decode(record)


def test_cycle_to_root() -> None:
    with pytest.raises(ValueError):
        loads(to_json(TreeRecord(0, [NodeRecord(1, 0, None)])))


def test_malformed_json_record() -> None:
    with pytest.raises(ValueError):
        loads('not json')
    with pytest.raises(ValueError):
        decode_dict({"root": 0})
