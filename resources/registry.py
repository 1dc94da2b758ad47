# resources/registry.py
import logging

logger = logging.getLogger(__name__)

_resources = {}


def register_resource(name, desc="", example=""):
    """Decorator registering an inspectable resource class under ``name``."""

    def decorator(resource_class):
        if name in _resources:
            logger.warning(f"Resource {name} already registered, overwriting")
        resource_class.resource_name = name
        resource_class.resource_desc = desc
        resource_class.resource_example = example
        _resources[name] = resource_class
        logger.debug(f"Registered resource: {name}")
        return resource_class

    return decorator


def get_resource(name):
    """Return the resource class registered under ``name``."""
    if name not in _resources:
        logger.error(f"Resource {name} not found in registry")
        raise ValueError(f"Unknown resource: {name}")
    return _resources[name]


def list_resources():
    return sorted(_resources)


def create_resource(name, opts, conn=None):
    """Instantiate a registered resource for the given selector."""
    return get_resource(name)(opts, conn)
