"""Default settings, user configuration validation and merging

User configurations are mappings (usually loaded from a YAML file) whose keys
are camelCase, for example:

    theme: dracula
    window:
      title: "user@terminal:~"
      autoHeight: true
    blocks:
      - block: neofetch
        config:
          username: user

They are validated by validate_user_config and merged with the defaults by
merge_config into an immutable TerminalConfig.
"""

import logging
import numbers
import pkgutil
import re
from collections import namedtuple

import yaml

from svgterminal.errors import ConfigError
from svgterminal.themes import DEFAULT_THEME, custom_theme, resolve_theme

logger = logging.getLogger(__name__)

PKG_STARTER_CONFIG_PATH = 'data/terminal.yml'

WINDOW_STYLES = ('macos', 'floating', 'minimal', 'none')

# Styles without a title bar
FRAMELESS_STYLES = ('floating', 'minimal', 'none')

_WINDOW_ATTRIBUTES = ['width', 'height', 'border_radius', 'title_bar_height',
                      'title', 'style', 'auto_height', 'min_height',
                      'max_height']
WindowConfig = namedtuple('WindowConfig', _WINDOW_ATTRIBUTES)
WindowConfig.__new__.__defaults__ = (1000, 700, 12, 40, 'user@terminal:~',
                                     'macos', False, 300, 1200)

_TEXT_ATTRIBUTES = ['font_family', 'font_size', 'line_height', 'padding',
                    'padding_top', 'prompt']
TextConfig = namedtuple('TextConfig', _TEXT_ATTRIBUTES)
TextConfig.__new__.__defaults__ = (
    'JetBrains Mono, Fira Code, Ubuntu Mono, Consolas, Monaco, monospace',
    14, 1.8, 12, 8, 'user@host:~$ '
)

EffectsConfig = namedtuple('EffectsConfig', ['text_glow', 'shadow', 'scanlines'])
EffectsConfig.__new__.__defaults__ = (True, True, True)

_ANIMATION_ATTRIBUTES = ['cursor_blink_cycle', 'char_appear_duration',
                         'output_line_stagger', 'command_output_pause',
                         'scroll_delay', 'output_end_pause',
                         'default_typing_duration', 'default_sequence_pause']
AnimationConfig = namedtuple('AnimationConfig', _ANIMATION_ATTRIBUTES)
AnimationConfig.__new__.__defaults__ = (1000, 10, 50, 300, 10, 200, 2000, 1000)
AnimationConfig.__doc__ = 'Animation timings in milliseconds'

ChromeConfig = namedtuple('ChromeConfig', ['title_font_size', 'button_radius',
                                           'button_spacing', 'dim_opacity',
                                           'button_y'])
ChromeConfig.__new__.__defaults__ = (13, 6, 20, 0.6, 16)

_TERMINAL_ATTRIBUTES = ['window', 'text', 'theme', 'effects', 'animation',
                        'chrome', 'max_duration', 'scroll_duration',
                        'fetch_timeout']
TerminalConfig = namedtuple('TerminalConfig', _TERMINAL_ATTRIBUTES)
TerminalConfig.__doc__ = 'Fully resolved configuration of the terminal'
TerminalConfig.max_duration.__doc__ = 'Soft limit of the animation duration in seconds'
TerminalConfig.scroll_duration.__doc__ = 'Duration of a one line scroll in milliseconds'
TerminalConfig.fetch_timeout.__doc__ = 'Timeout of HTTP requests made by blocks in milliseconds'

DEFAULT_MAX_DURATION = 90
DEFAULT_SCROLL_DURATION = 100
DEFAULT_FETCH_TIMEOUT = 10000

DEFAULT_CONFIG = TerminalConfig(
    window=WindowConfig(),
    text=TextConfig(),
    theme=resolve_theme(DEFAULT_THEME),
    effects=EffectsConfig(),
    animation=AnimationConfig(),
    chrome=ChromeConfig(),
    max_duration=DEFAULT_MAX_DURATION,
    scroll_duration=DEFAULT_SCROLL_DURATION,
    fetch_timeout=DEFAULT_FETCH_TIMEOUT,
)

TYPING_PRESETS = {
    'instant': 400,
    'fast': 500,
    'quick': 800,
    'medium': 1200,
    'standard': 1400,
    'slow': 1800,
    'long': 2200,
}
DEFAULT_TYPING = 1200

PAUSE_PRESETS = {
    'minimal': 300,
    'short': 500,
    'quick': 600,
    'medium': 800,
    'standard': 1000,
    'long': 1400,
    'dramatic': 1800,
    'showcase': 2800,
}
DEFAULT_PAUSE = 1000


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def resolve_typing(value):
    """Return a typing duration in milliseconds from a preset name or a
    number"""
    if _is_number(value):
        return value
    return TYPING_PRESETS.get(value, DEFAULT_TYPING)


def resolve_pause(value):
    """Return a pause duration in milliseconds from a preset name or a
    number"""
    if _is_number(value):
        return value
    return PAUSE_PRESETS.get(value, DEFAULT_PAUSE)


def snake_case(name):
    """Convert a camelCase configuration key to snake_case"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


# User facing name of each section and its defaults
SECTIONS = {
    'window': WindowConfig(),
    'terminal': TextConfig(),
    'effects': EffectsConfig(),
    'animation': AnimationConfig(),
    'chrome': ChromeConfig(),
}

_POSITIVE = {
    'width', 'height', 'title_bar_height', 'min_height', 'max_height',
    'font_size', 'line_height', 'cursor_blink_cycle', 'char_appear_duration',
    'default_typing_duration', 'title_font_size', 'button_spacing',
}

_NON_NEGATIVE = {
    'border_radius', 'padding', 'padding_top', 'output_line_stagger',
    'command_output_pause', 'scroll_delay', 'output_end_pause',
    'default_sequence_pause', 'button_radius', 'button_y',
}


def _check_value(path, field, value, default):
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError('{} must be a boolean'.format(path))
    elif isinstance(default, numbers.Real):
        if not _is_number(value):
            raise ConfigError('{} must be a number'.format(path))
        if field in _POSITIVE and value <= 0:
            raise ConfigError('{} must be positive'.format(path))
        if field in _NON_NEGATIVE and value < 0:
            raise ConfigError('{} must be greater than or equal to 0'.format(path))
        if field == 'dim_opacity' and not 0 <= value <= 1:
            raise ConfigError('{} must be between 0 and 1'.format(path))
    elif not isinstance(value, str):
        raise ConfigError('{} must be a string'.format(path))

    if field == 'style' and value not in WINDOW_STYLES:
        raise ConfigError('{} must be one of {} (got "{}")'
                          .format(path, ', '.join(WINDOW_STYLES), value))


def parse_section(section, raw):
    """Validate a configuration section and return its values keyed by field
    name

    :param section: Name of the section (key of SECTIONS)
    :param raw: Mapping of user values with camelCase or snake_case keys
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError('"{}" must be a mapping'.format(section))

    defaults = SECTIONS[section]
    values = {}
    for key, value in raw.items():
        field = snake_case(str(key))
        if field not in defaults._fields:
            raise ConfigError('Unknown option "{}.{}". Valid options: {}'
                              .format(section, key, ', '.join(defaults._fields)))
        _check_value('{}.{}'.format(section, key), field, value,
                     getattr(defaults, field))
        values[field] = value
    return values


def _check_positive_number(user_config, key):
    value = user_config.get(key)
    if value is not None and (not _is_number(value) or value <= 0):
        raise ConfigError('"{}" must be a positive number'.format(key))


_BLOCK_ENTRY_KEYS = {'block', 'config', 'command', 'color', 'typing', 'pause'}


def _validate_block_entry(index, entry):
    if not isinstance(entry, dict):
        raise ConfigError('blocks[{}] must be a mapping'.format(index))

    unknown = sorted(set(entry) - _BLOCK_ENTRY_KEYS)
    if unknown:
        raise ConfigError('Unknown key(s) in blocks[{}]: {}. Valid keys: {}'
                          .format(index, ', '.join(map(str, unknown)),
                                  ', '.join(sorted(_BLOCK_ENTRY_KEYS))))

    name = entry.get('block')
    if not isinstance(name, str) or not name:
        raise ConfigError('blocks[{}]: block name is required'.format(index))

    if entry.get('config') is not None and not isinstance(entry['config'], dict):
        raise ConfigError('blocks[{}].config must be a mapping'.format(index))

    for key in ('command', 'color'):
        if entry.get(key) is not None and not isinstance(entry[key], str):
            raise ConfigError('blocks[{}].{} must be a string'.format(index, key))

    for key in ('typing', 'pause'):
        value = entry.get(key)
        if value is not None and not isinstance(value, str) and not _is_number(value):
            raise ConfigError('blocks[{}].{} must be a preset name or a number'
                              .format(index, key))


_TOP_LEVEL_KEYS = {'theme', 'blocks', 'variables', 'maxDuration',
                   'scrollDuration', 'accessibilityLabel',
                   'fetchTimeout'} | set(SECTIONS)


def validate_user_config(user_config):
    """Raise ConfigError if user_config is not a valid configuration, return it
    unchanged otherwise"""
    if not isinstance(user_config, dict):
        raise ConfigError('Configuration must be a mapping')

    unknown = sorted(set(map(str, user_config)) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigError('Unknown configuration key(s): {}. Valid keys: {}'
                          .format(', '.join(unknown),
                                  ', '.join(sorted(_TOP_LEVEL_KEYS))))

    theme = user_config.get('theme')
    if theme is not None and not isinstance(theme, (str, dict)):
        raise ConfigError('"theme" must be a theme name or a mapping')

    for section in SECTIONS:
        parse_section(section, user_config.get(section))

    blocks = user_config.get('blocks')
    if not isinstance(blocks, list) or not blocks:
        raise ConfigError('At least one block is required')
    for index, entry in enumerate(blocks):
        _validate_block_entry(index, entry)

    variables = user_config.get('variables')
    if variables is not None and not isinstance(variables, dict):
        raise ConfigError('"variables" must be a mapping')

    for key in ('maxDuration', 'scrollDuration', 'fetchTimeout'):
        _check_positive_number(user_config, key)

    label = user_config.get('accessibilityLabel')
    if label is not None and not isinstance(label, str):
        raise ConfigError('"accessibilityLabel" must be a string')

    return user_config


def _merge_theme(theme):
    if theme is None:
        return resolve_theme(DEFAULT_THEME)
    if isinstance(theme, dict):
        colors = {snake_case(str(key)): value
                  for key, value in (theme.get('colors') or {}).items()}
        return custom_theme(name=theme.get('name', 'custom'),
                            colors=colors,
                            buttons=theme.get('buttons'))
    return resolve_theme(theme)


def merge_config(user_config):
    """Return the TerminalConfig obtained by overriding the defaults with the
    values of user_config"""
    sections = {section: defaults._replace(**parse_section(section,
                                                           user_config.get(section)))
                for section, defaults in SECTIONS.items()}

    def top_level(key, default):
        value = user_config.get(key)
        return default if value is None else value

    return TerminalConfig(
        window=sections['window'],
        text=sections['terminal'],
        theme=_merge_theme(user_config.get('theme')),
        effects=sections['effects'],
        animation=sections['animation'],
        chrome=sections['chrome'],
        max_duration=top_level('maxDuration', DEFAULT_MAX_DURATION),
        scroll_duration=top_level('scrollDuration', DEFAULT_SCROLL_DURATION),
        fetch_timeout=top_level('fetchTimeout', DEFAULT_FETCH_TIMEOUT),
    )


def load_config(path):
    """Read, parse and validate a YAML configuration file"""
    logger.debug('Loading configuration from {}'.format(path))
    try:
        with open(path, 'r', encoding='utf-8') as config_file:
            user_config = yaml.safe_load(config_file)
    except OSError as exc:
        raise ConfigError('Unable to read configuration file "{}": {}'
                          .format(path, exc.strerror)) from exc
    except yaml.YAMLError as exc:
        raise ConfigError('Invalid YAML in "{}": {}'.format(path, exc)) from exc

    return validate_user_config(user_config)


def starter_config():
    """Return the content of the example configuration file as bytes"""
    return pkgutil.get_data(__name__, PKG_STARTER_CONFIG_PATH)
