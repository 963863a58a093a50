from app.configs.settings import file_logger, pool_kwargs, settings

__all__ = [
    "file_logger",
    "pool_kwargs",
    "settings",
]
