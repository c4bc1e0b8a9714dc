"""
Tests for MarketFileStorage key naming, matching and pruning.
"""
import io

import pytest

from app.services.market_files import MarketFileStorage, market_key


@pytest.fixture
def storage(upload_dir):
    return MarketFileStorage(upload_dir)


def _touch(storage, name):
    path = storage.upload_dir / name
    path.write_bytes(b"x")
    return path


@pytest.mark.parametrize("market,location,expected", [
    ("Разнопромет", None, "Разнопромет"),
    ("Market2", "Центар", "Market2_Центар"),
    ("Market2", "", "Market2"),
    ("../etc", "a/b", "..-etc_a-b"),
])
def test_market_key(market, location, expected):
    assert market_key(market, location) == expected


def test_save_uses_key_timestamp_and_extension(storage):
    path = storage.save("Market2", "lokacija1", "cenovnik.xlsx", io.BytesIO(b"data"))

    assert path.parent == storage.upload_dir
    assert path.name.startswith("Market2_lokacija1_")
    assert path.suffix == ".xlsx"
    assert path.read_bytes() == b"data"


def test_files_for_matches_exact_key_only(storage):
    _touch(storage, "Market2_100.xlsx")
    _touch(storage, "Market2_lokacija1_200.xlsx")
    _touch(storage, "Market20_300.xlsx")
    _touch(storage, "Market2.xlsx")

    names = [p.name for p in storage.files_for("Market2")]

    assert names == ["Market2_100.xlsx", "Market2.xlsx"]
    assert [p.name for p in storage.files_for("Market2", "lokacija1")] == ["Market2_lokacija1_200.xlsx"]


def test_latest_is_newest_timestamp(storage):
    _touch(storage, "Market2_100.xlsx")
    _touch(storage, "Market2_900.xlsx")
    _touch(storage, "Market2_500.xls")

    assert storage.latest("Market2").name == "Market2_900.xlsx"
    assert storage.latest("Unknown") is None


def test_remove_stale_keeps_only_given_file(storage):
    _touch(storage, "Market2_100.xlsx")
    keep = _touch(storage, "Market2_200.xlsx")
    other = _touch(storage, "Market2_lokacija1_50.xlsx")

    removed = storage.remove_stale("Market2", None, keep)

    assert removed == ["Market2_100.xlsx"]
    assert [p.name for p in storage.files_for("Market2")] == ["Market2_200.xlsx"]
    assert other.exists()


def test_discard(storage):
    path = _touch(storage, "Market2_100.xlsx")

    storage.discard(path)

    assert not path.exists()
