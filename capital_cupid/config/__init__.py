from .config import Config, configure_logging, load_config, validate_config

__all__ = ["Config", "configure_logging", "load_config", "validate_config"]
