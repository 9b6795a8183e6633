import pytest

from core.metrics import _counter_cache, _hist_cache


@pytest.fixture(autouse=True)
def keep_metric_caches():
    """Los colectores de módulo deben sobrevivir a los tests que limpian el cache."""
    counters, histograms = dict(_counter_cache), dict(_hist_cache)
    yield
    _counter_cache.clear()
    _counter_cache.update(counters)
    _hist_cache.clear()
    _hist_cache.update(histograms)
