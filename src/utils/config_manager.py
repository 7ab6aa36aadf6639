"""
Configuration Manager for the Dynamic Test Runner.

This module loads runner settings from JSON/YAML files and command-line
overrides, with environment variable substitution and validation.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import re

import yaml


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""
    pass


class RunnerConfigManager:
    """
    Runner configuration manager.

    Settings are resolved in order: built-in defaults, configuration file,
    then explicit overrides (typically parsed command-line flags).
    """

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
    VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}

    DEFAULT_CONFIG = {
        'root_directory': 'tests/Feature',
        'namespace_prefix': 'Tests.Feature',
        'namespace_separator': '.',
        'declaration_keyword': 'function',
        'exclude_patterns': [],
        'line_width': 120,
        'log_level': 'WARNING',
        'log_file': None,
        'results_file': None,
        'mark_failures': False,
    }

    def __init__(self):
        """Initialize the configuration manager."""
        self.logger = logging.getLogger('test_runner.config_manager')
        self._env_vars_used = set()

    def load_config(self, config_source: Optional[str] = None,
                    overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Load runner configuration.

        Args:
            config_source: Path to JSON/YAML configuration file
            overrides: Values that take precedence over the file; None values are ignored

        Returns:
            Dict: Validated configuration

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        config = dict(self.DEFAULT_CONFIG)

        if config_source:
            file_config = self._load_config_file(config_source)
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"Configuration file must contain a mapping: {config_source}")
            config.update(file_config)
            self.logger.info(f"Loaded runner configuration from: {config_source}")

        if overrides:
            applied = {key: value for key, value in overrides.items() if value is not None}
            config.update(applied)
            if applied:
                self.logger.debug(f"Applied overrides: {sorted(applied)}")

        config = self._substitute_environment_variables(config)
        self._validate_config(config)

        self.logger.debug(f"Final runner configuration: {config}")
        return config

    def _load_config_file(self, config_path: str) -> Any:
        """
        Load configuration from JSON or YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Parsed file content

        Raises:
            ConfigurationError: If file loading fails
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        if not path.is_file():
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            content = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {str(e)}")

        return parse_structured_text(content, path.suffix, config_path)

    def _substitute_environment_variables(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Substitute ${VAR} and ${VAR:-default} references in string values.

        Args:
            config: Configuration dictionary

        Returns:
            Dict: Configuration with environment variables substituted
        """
        def substitute_value(value):
            if isinstance(value, str):
                for match in self.ENV_VAR_PATTERN.findall(value):
                    if ':-' in match:
                        var_name, default_value = match.split(':-', 1)
                    else:
                        var_name, default_value = match, None

                    env_value = os.environ.get(var_name.strip(), default_value)

                    if env_value is None:
                        self.logger.warning(f"Environment variable not found: {var_name}")
                        continue

                    self._env_vars_used.add(var_name.strip())
                    value = value.replace(f"${{{match}}}", str(env_value))

                return value
            elif isinstance(value, dict):
                return {k: substitute_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [substitute_value(item) for item in value]
            else:
                return value

        substituted_config = substitute_value(config)

        if self._env_vars_used:
            self.logger.info(f"Substituted environment variables: {', '.join(sorted(self._env_vars_used))}")

        return substituted_config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate runner configuration, coercing values where that is unambiguous.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        unknown_keys = sorted(set(config) - set(self.DEFAULT_CONFIG))
        if unknown_keys:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown_keys)}")

        for key in ('root_directory', 'namespace_prefix', 'namespace_separator', 'declaration_keyword'):
            if not isinstance(config[key], str) or not config[key]:
                raise ConfigurationError(f"'{key}' must be a non-empty string")

        try:
            config['line_width'] = int(config['line_width'])
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid line width: {config['line_width']}")
        if config['line_width'] < 1:
            raise ConfigurationError(f"Line width must be positive: {config['line_width']}")

        log_level = str(config['log_level']).upper()
        if log_level not in self.VALID_LOG_LEVELS:
            valid = ', '.join(sorted(self.VALID_LOG_LEVELS))
            raise ConfigurationError(f"Invalid log level: {config['log_level']}. Valid levels: {valid}")
        config['log_level'] = log_level

        exclude_patterns = config['exclude_patterns'] or []
        if isinstance(exclude_patterns, str):
            exclude_patterns = [exclude_patterns]
        if not isinstance(exclude_patterns, list) or not all(isinstance(p, str) for p in exclude_patterns):
            raise ConfigurationError("'exclude_patterns' must be a list of glob patterns")
        config['exclude_patterns'] = list(exclude_patterns)

        for key in ('results_file', 'log_file'):
            if config[key] is not None and (not isinstance(config[key], str) or not config[key]):
                raise ConfigurationError(f"'{key}' must be a file path")

        if not isinstance(config['mark_failures'], bool):
            raise ConfigurationError("'mark_failures' must be true or false")


def parse_structured_text(content: str, suffix: str = '', source: str = '<string>') -> Any:
    """
    Parse JSON or YAML text, choosing the format by file suffix or content.

    Raises:
        ConfigurationError: If the text is not valid JSON/YAML
    """
    suffix = suffix.lower()
    try:
        if suffix == '.json':
            return json.loads(content)
        elif suffix in ['.yaml', '.yml']:
            return yaml.safe_load(content)

        stripped = content.strip()
        if stripped.startswith('{') or stripped.startswith('['):
            return json.loads(stripped)
        return yaml.safe_load(stripped)

    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {source}: {str(e)}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {source}: {str(e)}")


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> RunnerConfigManager:
    """
    Get the global runner configuration manager.

    Returns:
        RunnerConfigManager: Global configuration manager instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = RunnerConfigManager()
    return _config_manager
