#    config.py
#        Configuration of the size report, loadable from json files and overridable by the
#        command line
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'LimitsConfig',
    'SizeConfig',
    'DEFAULT_CONFIG',
    'USER_CONFIG_FILENAME',
    'get_user_config_file',
    'load_config',
    'limits_from_config'
]

import os
import json
import logging
from copy import deepcopy

import appdirs

from elfmem import tools
from elfmem.tools import validation
from elfmem.core.limits import LimitSet
from elfmem.exceptions import ConfigError, LimitParseError
from elfmem.tools.typing import *

USER_CONFIG_FILENAME = 'config.json'

logger = logging.getLogger(__name__)


class LimitsConfig(TypedDict, total=False):
    total: Optional[Union[str, int]]
    instruction: Optional[Union[str, int]]
    data: Optional[Union[str, int]]


class SizeConfig(TypedDict, total=False):
    """The size report configuration definition loadable from json"""
    limits: LimitsConfig
    fixed_only: bool
    show_segments: bool
    color: Literal['auto', 'always', 'never']
    output_format: Literal['text', 'json']


DEFAULT_CONFIG: SizeConfig = {
    'limits': {
        'total': None,
        'instruction': None,
        'data': None
    },
    'fixed_only': False,
    'show_segments': False,
    'color': 'auto',
    'output_format': 'text'
}


def get_user_config_file() -> str:
    """Location of the per-user configuration file. It may not exist"""
    return os.path.join(appdirs.user_config_dir('elfmem'), USER_CONFIG_FILENAME)


def _read_config_file(filename: str) -> Dict[Any, Any]:
    logger.debug('Loading configuration file: "%s"' % filename)
    with open(filename) as f:
        try:
            user_cfg = json.loads(f.read())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON in {filename}. {e}") from e

    if not isinstance(user_cfg, dict):
        raise ConfigError(f"Configuration file {filename} must contain a JSON object")
    return user_cfg


def validate_config(config: SizeConfig) -> None:
    try:
        validation.assert_type(config['limits'], 'limits', dict)
        for name in ('total', 'instruction', 'data'):
            validation.assert_type_or_none(config['limits'].get(name, None), f'limits.{name}', (str, int))
        validation.assert_type(config['fixed_only'], 'fixed_only', bool)
        validation.assert_type(config['show_segments'], 'show_segments', bool)
        validation.assert_val_in(config['color'], 'color', ['auto', 'always', 'never'])
        validation.assert_val_in(config['output_format'], 'output_format', ['text', 'json'])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration. {e}") from e


def load_config(config_file: Optional[str] = None,
                additional_config: Optional[SizeConfig] = None,
                use_user_config: bool = True) -> SizeConfig:
    """Builds the effective configuration. Each layer overrides the previous one:
    defaults, user configuration file, given configuration file, additional config (command line)

    :raise ConfigError: If a file is invalid or a value has the wrong type
    """
    config = deepcopy(DEFAULT_CONFIG)

    if use_user_config:
        user_config_file = get_user_config_file()
        if os.path.isfile(user_config_file):
            tools.update_dict_recursive(cast(Dict[Any, Any], config), _read_config_file(user_config_file))

    if config_file is not None:
        if not os.path.isfile(config_file):
            raise ConfigError(f"Given config does not exist: {config_file}")
        tools.update_dict_recursive(cast(Dict[Any, Any], config), _read_config_file(config_file))

    if additional_config is not None:
        tools.update_dict_recursive(cast(Dict[Any, Any], config), cast(Dict[Any, Any], additional_config))

    validate_config(config)
    return config


def limits_from_config(config: SizeConfig) -> LimitSet:
    """Parse the limits of a configuration. Integers are taken as bytes

    :raise ConfigError: If a limit does not follow the size grammar
    """
    texts: Dict[str, Optional[str]] = {}
    for name in ('total', 'instruction', 'data'):
        val = config['limits'].get(name, None)
        texts[name] = None if val is None else str(val)

    try:
        return LimitSet.from_strings(**texts)
    except LimitParseError as e:
        raise ConfigError(str(e)) from e
