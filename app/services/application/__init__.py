"""Application services managed by :class:`~app.services.container.ServiceContainer`."""
