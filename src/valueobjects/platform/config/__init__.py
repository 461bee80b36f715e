from .value_objects_config import ValueObjectsConfig, load_value_objects_config

__all__ = [
    "ValueObjectsConfig",
    "load_value_objects_config",
]
