# Module for loading and validating configuration
import json
import logging
import constants # Import constants


def default_config():
    """Returns a fresh configuration dictionary holding only default values."""
    return {
        'mirror_root': constants.DEFAULT_MIRROR_ROOT,
        'asset_host_substrings': list(constants.DEFAULT_ASSET_HOST_SUBSTRINGS),
        'excluded_urls': list(constants.DEFAULT_EXCLUDED_URLS),
        'log_file': constants.DEFAULT_LOG_FILE,
        'log_level': constants.DEFAULT_LOG_LEVEL,
        'host': constants.DEFAULT_HOST,
        'port': constants.DEFAULT_PORT,
        'lock_timeout_seconds': constants.DEFAULT_LOCK_TIMEOUT,
    }


def _validate_string_list(config, key):
    value = config[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Config '{key}' must be a list of strings.")


def validate_config(config):
    """Validates value types and ranges. Raises ValueError on the first problem found."""
    for key in ('mirror_root', 'log_file', 'host'):
        if not isinstance(config[key], str) or not config[key]:
            raise ValueError(f"Config '{key}' must be a non-empty string.")

    _validate_string_list(config, 'asset_host_substrings')
    _validate_string_list(config, 'excluded_urls')

    # bool is an int subclass, reject it explicitly
    port = config['port']
    if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
        raise ValueError("Config 'port' must be an integer between 1 and 65535.")

    timeout = config['lock_timeout_seconds']
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout < 0:
        raise ValueError("Config 'lock_timeout_seconds' must be a non-negative number.")

    level = config['log_level']
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Config 'log_level' must be a logging level name, got '{level}'.")
    config['log_level'] = level.upper()
    return config


def load_config(config_path=None):
    """
    Loads configuration from a JSON file, validates, and sets defaults.
    With no path, the defaults alone are validated and returned.
    """
    config = default_config()
    if config_path is None:
        return validate_config(config)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file '{config_path}' must contain a JSON object.")

        unknown_keys = sorted(set(loaded) - set(config))
        if unknown_keys:
            raise ValueError(f"Config file '{config_path}' has unknown keys: {', '.join(unknown_keys)}")

        # --- Set Defaults for Optional Keys ---
        config.update(loaded)
        return validate_config(config)

    except FileNotFoundError:
        raise # Re-raise the FileNotFoundError
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from config file '{config_path}': {e}") from e
    except ValueError:
        raise # Let the ValueError raised during validation propagate
    except Exception as e: # Catch any other unexpected errors during loading/validation
        raise RuntimeError(f"An unexpected error occurred loading configuration from '{config_path}': {e}") from e
