from amic_invisible.services.hashing import hash_name

NAMES = ["Alice", "Bob", "Carol", "alice", "Àngels", "Josep Maria", ""]


def test_hash_is_deterministic():
    assert hash_name("Alice") == hash_name("Alice")


def test_hash_is_sha256_hex():
    token = hash_name("Alice")
    assert len(token) == 64
    assert int(token, 16) >= 0
    assert hash_name("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_distinct_names_give_distinct_tokens():
    tokens = {hash_name(name) for name in NAMES}
    assert len(tokens) == len(NAMES)
