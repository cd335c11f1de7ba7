from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from diary.runtime.config.config_data import ConfigData
from diary.runtime.config.config_template import load_templated_yaml
from diary.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_config(config_file: Path | None = None) -> ConfigData:
    """Load the configuration the application starts with.

    The file named by ``config_file`` (or ``DIARY_CONFIG``, default ``config.yaml``)
    is used when it exists; otherwise the built-in defaults apply. ``DATABASE_URL``
    and ``APP_ENVIRONMENT`` override the file.
    """
    env = EnvironmentVariables()
    path = config_file or Path(env.config_file)

    if path.exists():
        config = load_templated_yaml(path)
    else:
        if config_file is not None:
            raise FileNotFoundError(f"Configuration file not found: {path}")
        logger.debug("No configuration file at {}; using defaults", path)
        config = ConfigData()

    if "environment" in env.model_fields_set:
        config.app.environment = env.environment
    if env.database_url:
        config.database.url = env.database_url
    return config


# Context variable for application context; filled by load_config() on first use
_app_context: ContextVar[AppContext | None] = ContextVar("app_context", default=None)


def get_context() -> AppContext:
    """Get the current application context.

    The default configuration is loaded the first time it is needed, not when
    this module is imported, so callers such as the CLI can install their own
    with ``set_config`` before any file is read.

    Returns:
        AppContext: The current application context containing configuration.
    """
    context = _app_context.get()
    if context is None:
        context = AppContext(config=load_config())
        _app_context.set(context)
    return context


def set_context(context: AppContext) -> Token[AppContext | None]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Recursively dump a Pydantic model keeping only explicitly set fields.

    If any nested field is explicitly set, the parent field containing that
    nested model is included as well.
    """
    result = {}

    explicitly_set_fields = model.model_fields_set

    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested_result = _recursive_model_dump_exclude_unset(field_value)
            if nested_result:
                result[field_name] = nested_result
            elif field_name in explicitly_set_fields:
                result[field_name] = field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries, values from override_dict winning."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set fields of override_config into base_config."""
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the parent context.

    Example:
        override = ConfigData()
        override.ui.page_size = 3
        with with_context(override):
            assert get_config().ui.page_size == 3
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with the provided one."""
    context = _app_context.get()
    if context is None:
        set_context(AppContext(config=config))
    else:
        set_context(replace(context, config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
