"""
Helpers para exponer métricas Prometheus sin duplicar colectores al recargar módulos.
"""
from typing import Iterable

from prometheus_client import REGISTRY, Counter, Histogram


_counter_cache: dict[tuple[str, tuple[str, ...]], object] = {}
_hist_cache: dict[tuple[str, tuple[str, ...]], object] = {}


def _registered(name: str):
    # El registro indexa por nombre expuesto; los Counter añaden sufijos (_total, _created).
    return REGISTRY._names_to_collectors.get(name)


def get_counter(name: str, doc: str, labelnames: Iterable[str] = ()) -> Counter:
    key = (name, tuple(labelnames))
    if key in _counter_cache:
        return _counter_cache[key]
    try:
        metric = Counter(name, doc, list(labelnames))
    except ValueError:
        # La métrica ya existe en el registro (común en tests)
        metric = _registered(name) or _registered(f"{name}_total")
        if metric is None:
            raise
    _counter_cache[key] = metric
    return metric


def get_histogram(
    name: str,
    doc: str,
    labelnames: Iterable[str] = (),
    buckets: Iterable[float] | None = None,
) -> Histogram:
    key = (name, tuple(labelnames))
    if key in _hist_cache:
        return _hist_cache[key]
    try:
        if buckets:
            metric = Histogram(name, doc, list(labelnames), buckets=buckets)
        else:
            metric = Histogram(name, doc, list(labelnames))
    except ValueError:
        metric = _registered(f"{name}_sum") or _registered(name)
        if metric is None:
            raise
    _hist_cache[key] = metric
    return metric
