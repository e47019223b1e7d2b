import pytest


def test_import_mythlings_package() -> None:
    import importlib

    module = importlib.import_module("mythlings")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from mythlings.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_repositories_load_lazily(tmp_path) -> None:
    from mythlings.data.errors import DataLoadError
    from mythlings.data.repositories import MythlingsRepository

    repo = MythlingsRepository(base_path=tmp_path / "missing")
    with pytest.raises(DataLoadError):
        repo.all()
