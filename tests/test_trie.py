import pytest

from troutwsgi.trie import Key, Node, Trie, find_nodes, path_string, path_vars


def _keys(*parts):
    keys = []
    for part in parts:
        if part.startswith("{") and part.endswith("}"):
            keys.append(Key(part[1:-1], dynamic=True))
        else:
            keys.append(Key(part))
    return keys


def test_key_str_nul():
    assert str(Key(nul=True)) == "{::NULL::}"


def test_key_str_dynamic_prefix():
    assert str(Key("id", dynamic=True, prefix=True)) == "{id::prefix}"


def test_key_str_static_prefix():
    assert str(Key("static", prefix=True)) == "static::prefix"


def test_key_str_static_plain():
    assert str(Key("v1")) == "v1"


@pytest.mark.parametrize(
    "other, expected",
    [
        (Key("a"), True),
        (Key("a", dynamic=True), False),
        (Key("a", prefix=True), False),
        (Key("a", nul=True), False),
        (Key("b"), False),
    ],
)
def test_key_equals(other, expected):
    assert Key("a").equals(other) is expected


def test_new_child_placement():
    parent = Node()
    static = parent.new_child(Key("s"), False)
    wild = parent.new_child(Key("w", dynamic=True), False)
    term = parent.new_child(Key(nul=True), True)
    assert parent.children == {"s": static}
    assert parent.wild_children == [wild]
    assert parent.terminator is term
    assert all(c.parent is parent for c in (static, wild, term))
    assert all(c.depth == parent.depth + 1 for c in (static, wild, term))


def test_add_returns_nul_terminator():
    trie = Trie()
    term = trie.add(_keys("posts", "{slug}"), {})
    assert term.value.nul
    assert term.term
    assert term.parent.terminator is term


def test_add_same_path_twice_returns_same_node():
    trie = Trie()
    first = trie.add(_keys("posts", "{slug}"), {})
    second = trie.add(_keys("posts", "{slug}"), {})
    assert first is second


def test_add_shares_common_ancestors():
    trie = Trie()
    one = trie.add(_keys("ancestor", "one"), {})
    two = trie.add(_keys("ancestor", "two"), {})
    assert one is not two
    assert one.parent.parent is two.parent.parent
    assert list(trie.root.children) == ["ancestor"]


def test_add_copies_methods():
    handler = object()
    trie = Trie()
    term = trie.add(_keys("x"), {"GET": handler})
    assert term.methods == {"GET": handler}


def test_find_nodes_static_match():
    trie = Trie()
    term = trie.add(_keys("v1"), {})
    found = trie.find_nodes(["v1"])
    assert [n.terminator for n in found] == [term]


def test_find_nodes_no_match():
    trie = Trie()
    trie.add(_keys("v1"), {})
    assert trie.find_nodes(["v2"]) == []
    assert trie.find_nodes(["v1", "extra"]) == []


def test_find_nodes_static_and_dynamic():
    trie = Trie()
    static = trie.add(_keys("v1"), {})
    dynamic = trie.add(_keys("{id}"), {})
    found = {n.terminator for n in trie.find_nodes(["v1"])}
    assert found == {static, dynamic}
    other = [n.terminator for n in trie.find_nodes(["hello"])]
    assert other == [dynamic]


def test_find_nodes_prefix_matches_longer_paths():
    trie = Trie()
    keys = _keys("prefix", "{id}")
    keys[-1] = Key("id", dynamic=True, prefix=True)
    term = trie.add(keys, {})
    for path in (["prefix", "foo"], ["prefix", "foo", "bar", "baz"]):
        found = trie.find_nodes(path)
        assert [n.terminator for n in found] == [term]


def test_find_nodes_module_function_matches_method():
    trie = Trie()
    trie.add(_keys("a", "{b}"), {})
    assert find_nodes(trie.root, ["a", "z"]) == trie.find_nodes(["a", "z"])


def test_find_nodes_none_node():
    assert find_nodes(None, ["a"]) == []


def test_path_vars_repeated_names_keep_order():
    trie = Trie()
    term = trie.add(_keys("posts", "{id}", "comments", "{id}"), {})
    pieces = ["posts", "foo", "comments", "bar"]
    assert trie.path_vars(term, pieces) == {"id": ["foo", "bar"]}


def test_path_vars_distinct_names():
    trie = Trie()
    term = trie.add(_keys("posts", "{slug}", "comments", "{id}"), {})
    pieces = ["posts", "foo", "comments", "bar"]
    assert path_vars(term, pieces) == {"slug": ["foo"], "id": ["bar"]}


def test_path_vars_static_only_is_empty():
    trie = Trie()
    term = trie.add(_keys("ancestor", "one"), {})
    assert trie.path_vars(term, ["ancestor", "one"]) == {}


def test_path_vars_empty_input_or_node():
    trie = Trie()
    term = trie.add(_keys("{id}"), {})
    assert path_vars(term, []) == {}
    assert path_vars(None, ["x"]) == {}


def test_path_string_dynamic():
    trie = Trie()
    term = trie.add(_keys("posts", "{slug}", "comments", "{id}"), {})
    assert trie.path_string(term) == "/posts/{slug}/comments/{id}"


def test_path_string_prefix():
    trie = Trie()
    keys = _keys("prefix", "{id}")
    keys[-1] = Key("id", dynamic=True, prefix=True)
    term = trie.add(keys, {})
    assert path_string(term) == "/prefix/{id::prefix}"


def test_path_string_root_is_empty():
    trie = Trie()
    term = trie.add([Key("")], {})
    assert trie.path_string(term) == ""
    assert path_string(None) == ""