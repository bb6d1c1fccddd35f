"""Contract implemented by content blocks and registry of available blocks"""

import abc
from collections import namedtuple

from svgterminal.config import snake_case
from svgterminal.errors import ConfigError

BlockContext = namedtuple('BlockContext', ['now', 'config', 'variables'])
BlockContext.__doc__ = 'Read-only data shared by all the blocks of a generation'
BlockContext.now.__doc__ = 'Datetime of the generation'
BlockContext.config.__doc__ = 'TerminalConfig in use'
BlockContext.variables.__doc__ = 'Mapping of user defined variables'

BlockResult = namedtuple('BlockResult', ['command', 'lines', 'color', 'typing',
                                         'pause'])
BlockResult.__new__.__defaults__ = (None, None, None)
BlockResult.__doc__ = 'Command typed in the terminal and the output it prints'
BlockResult.typing.__doc__ = 'Typing preset name or duration in milliseconds'
BlockResult.pause.__doc__ = 'Pause preset name or duration in milliseconds'


_TYPE_NAMES = {bool: 'boolean', float: 'number', list: 'list', str: 'string',
               dict: 'mapping'}


def make_options_type(name, defaults):
    """Build an Options namedtuple from a mapping of option names to default
    values"""
    options = namedtuple(name, list(defaults))
    options.__new__.__defaults__ = tuple(defaults.values())
    return options


def _option_type(default):
    """Type expected for an option given its default value, None if any type
    is accepted"""
    if isinstance(default, bool):
        return bool
    if isinstance(default, (int, float)):
        return float
    if isinstance(default, (list, tuple)):
        return list
    if isinstance(default, (str, dict)):
        return type(default)
    return None


def _has_type(value, expected):
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected is list:
        return isinstance(value, (list, tuple))
    return isinstance(value, expected)


class Block(abc.ABC):
    """Named generator of terminal content

    Subclasses define an Options namedtuple whose defaults are the default
    values of the options of the block.
    """
    name = None
    description = ''
    Options = namedtuple('Options', [])

    def make_options(self, raw):
        """Validate the configuration mapping of the block and return an
        instance of Options"""
        raw = raw or {}
        if not isinstance(raw, dict):
            raise ConfigError('Configuration of block "{}" must be a mapping'
                              .format(self.name))
        values = {snake_case(str(key)): value for key, value in raw.items()}
        unknown = sorted(set(values) - set(self.Options._fields))
        if unknown:
            valid = ', '.join(self.Options._fields) or 'none'
            raise ConfigError('Unknown option(s) for block "{}": {}. Valid options: {}'
                              .format(self.name, ', '.join(unknown), valid))

        defaults = self.Options()
        for field, value in values.items():
            expected = _option_type(getattr(defaults, field))
            if expected is not None and value is not None \
                    and not _has_type(value, expected):
                raise ConfigError('Option "{}" of block "{}" must be of type {}'
                                  .format(field, self.name, _TYPE_NAMES[expected]))
        return defaults._replace(**values)

    @abc.abstractmethod
    async def render(self, context, options):
        """Return a BlockResult

        :param context: BlockContext
        :param options: Instance of Options
        """


class BlockRegistry:
    """Mapping between block names and blocks"""
    def __init__(self, blocks=()):
        self._blocks = {}
        self.register_all(blocks)

    def register(self, block):
        """Add block to the registry, replacing any block with the same
        name"""
        self._blocks[block.name] = block

    def register_all(self, blocks):
        for block in blocks:
            self.register(block)

    def get(self, name):
        return self._blocks.get(name)

    def names(self):
        return list(self._blocks)

    def __contains__(self, name):
        return name in self._blocks

    def __iter__(self):
        return iter(self._blocks.values())

    def __len__(self):
        return len(self._blocks)
