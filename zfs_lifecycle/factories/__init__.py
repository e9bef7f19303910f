from .service_factory import (
    ServiceFactory,
    create_default_service_factory,
    get_default_service_factory,
)

__all__ = [
    'ServiceFactory',
    'create_default_service_factory',
    'get_default_service_factory',
]
