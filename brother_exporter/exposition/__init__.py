from .sink import CONTENT_TYPE_LATEST, ObservationCollector, render_observations

__all__ = ["CONTENT_TYPE_LATEST", "ObservationCollector", "render_observations"]
