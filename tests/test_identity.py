import pytest

from core.identity import generate_id


def test_generate_id_uses_prefix():
    value = generate_id("inv")
    prefix, _, suffix = value.partition("_")
    assert prefix == "inv"
    assert len(suffix) == 32


def test_generate_id_is_unique():
    assert len({generate_id("usr") for _ in range(200)}) == 200


def test_generate_id_rejects_empty_prefix():
    with pytest.raises(ValueError):
        generate_id("  ")
