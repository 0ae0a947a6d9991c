from env.env import (
    DEFAULT_CHANNEL_ID,
    DEFAULT_OUTPUT_FILE,
    PROJECT_ROOT,
    ConfigError,
    Environment,
    LoggingEnvironment,
    get_env,
    get_logging_env,
    logs_dir,
    reset_env_caches,
)

__all__ = [
    "DEFAULT_CHANNEL_ID",
    "DEFAULT_OUTPUT_FILE",
    "PROJECT_ROOT",
    "ConfigError",
    "Environment",
    "LoggingEnvironment",
    "get_env",
    "get_logging_env",
    "logs_dir",
    "reset_env_caches",
]
