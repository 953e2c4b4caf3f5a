# ==============================================
# Metric Sink
# ==============================================
#
# PURPOSE:
#   Render Observations as Prometheus text exposition.
#
#   Each render uses its own CollectorRegistry holding one
#   ObservationCollector, so nothing leaks between probes and the
#   process-wide default registry is never touched.
#
#   Output is deterministic: families sorted by name, samples sorted
#   by label set, numbers formatted by prometheus_client.
#
# ==============================================

from collections import defaultdict
from typing import Dict, Iterable, List

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from prometheus_client.metrics_core import Metric

from brother_exporter.classification.observation import Observation


DEFAULT_NAMESPACE = "brother_printer"


def metric_name(namespace: str, suffix: str) -> str:
    return f"{namespace}_{suffix}" if namespace else suffix


def _documentation(suffix: str) -> str:
    if suffix == "info":
        return "Printer identification, one label per info column."
    return f"Printer maintenance counter: {suffix.replace('_', ' ')}."


class ObservationCollector:
    """Custom collector exposing a fixed list of Observations as gauges."""

    def __init__(self, observations: Iterable[Observation], namespace: str = DEFAULT_NAMESPACE):
        self._observations = list(observations)
        self._namespace = namespace

    def collect(self):
        families: Dict[str, List[Observation]] = defaultdict(list)
        for observation in self._observations:
            families[observation.metric_name].append(observation)

        for suffix in sorted(families):
            name = metric_name(self._namespace, suffix)
            family = Metric(name, _documentation(suffix), "gauge")
            for observation in sorted(families[suffix], key=lambda o: o.sort_key):
                family.add_sample(name, dict(sorted(observation.labels.items())), observation.value)
            yield family


def render_observations(
    observations: Iterable[Observation],
    namespace: str = DEFAULT_NAMESPACE
) -> bytes:
    """
    Render observations in the Prometheus text format.

    Returns:
        The exposition body; serve it with CONTENT_TYPE_LATEST
    """
    registry = CollectorRegistry()
    registry.register(ObservationCollector(observations, namespace))
    return generate_latest(registry)


__all__ = [
    "CONTENT_TYPE_LATEST",
    "DEFAULT_NAMESPACE",
    "ObservationCollector",
    "metric_name",
    "render_observations",
]
