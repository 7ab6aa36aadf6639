"""
Unit tests for runner configuration loading.
"""

import json

import pytest

from utils.config_manager import ConfigurationError, RunnerConfigManager, parse_structured_text


@pytest.fixture
def manager():
    return RunnerConfigManager()


def test_defaults(manager):
    config = manager.load_config()

    assert config['root_directory'] == 'tests/Feature'
    assert config['namespace_prefix'] == 'Tests.Feature'
    assert config['namespace_separator'] == '.'
    assert config['declaration_keyword'] == 'function'
    assert config['line_width'] == 120
    assert config['log_level'] == 'WARNING'


def test_yaml_file_and_overrides(manager, tmp_path):
    path = tmp_path / "runner.yaml"
    path.write_text(
        "root_directory: tests\n"
        "namespace_prefix: Tests\n"
        "declaration_keyword: def\n"
        "log_level: info\n",
        encoding='utf-8'
    )

    config = manager.load_config(str(path), overrides={'declaration_keyword': 'function', 'root_directory': None})

    assert config['root_directory'] == 'tests'
    assert config['namespace_prefix'] == 'Tests'
    assert config['declaration_keyword'] == 'function'
    assert config['log_level'] == 'INFO'


def test_json_file(manager, tmp_path):
    path = tmp_path / "runner.json"
    path.write_text(json.dumps({"line_width": "80", "exclude_patterns": "*.bak"}), encoding='utf-8')

    config = manager.load_config(str(path))

    assert config['line_width'] == 80
    assert config['exclude_patterns'] == ['*.bak']


def test_environment_substitution(manager, monkeypatch):
    monkeypatch.setenv('SUITE_ROOT', 'custom/tests')

    config = manager.load_config(overrides={
        'root_directory': '${SUITE_ROOT}',
        'namespace_prefix': '${SUITE_PREFIX_UNSET:-App.Tests}',
    })

    assert config['root_directory'] == 'custom/tests'
    assert config['namespace_prefix'] == 'App.Tests'


@pytest.mark.parametrize("overrides, message", [
    ({'namespace_prefix': ''}, 'namespace_prefix'),
    ({'line_width': 0}, 'positive'),
    ({'line_width': 'wide'}, 'Invalid line width'),
    ({'log_level': 'LOUD'}, 'Invalid log level'),
    ({'colour': True}, 'Unknown configuration keys'),
    ({'exclude_patterns': [1, 2]}, 'glob patterns'),
    ({'exclude_patterns': 5}, 'glob patterns'),
    ({'exclude_patterns': {'a': 1}}, 'glob patterns'),
    ({'results_file': 5}, 'results_file'),
    ({'results_file': ''}, 'results_file'),
    ({'log_file': 5}, 'log_file'),
    ({'mark_failures': 'yes'}, 'mark_failures'),
])
def test_invalid_values(manager, overrides, message):
    with pytest.raises(ConfigurationError, match=message):
        manager.load_config(overrides=overrides)


def test_missing_file(manager, tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        manager.load_config(str(tmp_path / "absent.yaml"))


def test_file_must_be_a_mapping(manager, tmp_path):
    path = tmp_path / "runner.yml"
    path.write_text("- a\n- b\n", encoding='utf-8')

    with pytest.raises(ConfigurationError, match="mapping"):
        manager.load_config(str(path))


def test_parse_structured_text_detects_format():
    assert parse_structured_text('{"a": 1}') == {"a": 1}
    assert parse_structured_text('a: 1') == {"a": 1}

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        parse_structured_text("a: [1, 2", ".yaml")
