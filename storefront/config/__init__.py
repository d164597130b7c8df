"""Configuration package.

Note: settings are built at import time of :mod:`storefront.config.settings`,
not here, so importing the package never touches the environment. Import from
``storefront.config.settings`` directly where needed.
"""

__all__: list[str] = []
