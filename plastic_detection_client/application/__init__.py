from .detection_client import STATE_TOPIC, DetectionClient, StateListener

__all__ = ["DetectionClient", "STATE_TOPIC", "StateListener"]
