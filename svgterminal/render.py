"""Generation of an SVG terminal from a user configuration

Blocks are rendered one after the other, in configuration order, and their
results turned into the command and output sequences of the animation.
"""

import logging
from datetime import datetime

from svgterminal.anim import Sequence, generate_static_svg, generate_svg
from svgterminal.blocks import BlockContext, default_registry
from svgterminal.config import (merge_config, resolve_pause, resolve_typing,
                                validate_user_config)
from svgterminal.errors import BlockError, ConfigError

logger = logging.getLogger(__name__)


async def render_blocks(user_config, config, registry, now):
    """Render the blocks listed by user_config and return a list of
    (entry, BlockResult) pairs

    :param user_config: Validated user configuration
    :param config: TerminalConfig passed to the blocks
    :param registry: BlockRegistry in which blocks are looked up
    :param now: Datetime of the generation
    """
    context = BlockContext(now=now, config=config,
                           variables=user_config.get('variables') or {})
    results = []
    for entry in user_config['blocks']:
        name = entry['block']
        block = registry.get(name)
        if block is None:
            raise BlockError('Unknown block "{}". Available: {}'
                             .format(name, ', '.join(sorted(registry.names()))))

        options = block.make_options(entry.get('config'))
        logger.debug('Rendering block "{}"'.format(name))
        try:
            result = await block.render(context, options)
        except (ConfigError, BlockError):
            raise
        except Exception as exc:
            raise BlockError('Block "{}" failed: {}'.format(name, exc)) from exc
        results.append((entry, result))
    return results


def _override(entry, key, value):
    """Value of key in a block entry if it is set, value otherwise"""
    if entry.get(key) is None:
        return value
    return entry[key]


def build_sequences(results, config):
    """Return the sequences of the animation for the results of the blocks

    Values set in a block entry override the ones of the block result.
    """
    sequences = []
    for entry, result in results:
        typing = _override(entry, 'typing', result.typing)
        pause = _override(entry, 'pause', result.pause)
        sequences.append(Sequence.command(
            _override(entry, 'command', result.command),
            typing_duration=resolve_typing(typing),
            pause=config.animation.command_output_pause,
        ))
        sequences.append(Sequence.output(
            '\n'.join(result.lines),
            color=_override(entry, 'color', result.color),
            pause=resolve_pause(pause),
        ))
    return sequences


async def generate(user_config, registry=None, now=None):
    """Return the animated SVG described by user_config as a string

    :raise ConfigError: if the configuration is invalid
    :raise BlockError: if a block is unknown or fails
    """
    validate_user_config(user_config)
    config = merge_config(user_config)
    if registry is None:
        registry = default_registry()
    results = await render_blocks(user_config, config, registry,
                                  now or datetime.now())
    sequences = build_sequences(results, config)
    return generate_svg(sequences, config, user_config.get('accessibilityLabel'))


async def generate_static(user_config, registry=None, now=None):
    """Return a still SVG showing all the commands and outputs at once"""
    validate_user_config(user_config)
    config = merge_config(user_config)
    if registry is None:
        registry = default_registry()
    results = await render_blocks(user_config, config, registry,
                                  now or datetime.now())
    lines = []
    for entry, result in results:
        command = _override(entry, 'command', result.command)
        lines.append('{}{}'.format(config.text.prompt, command))
        for line in result.lines:
            # Same line breaks as the animated terminal
            lines.extend(line.split('\n'))
    return generate_static_svg(lines, config, user_config.get('accessibilityLabel'))
