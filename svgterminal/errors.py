class ConfigError(Exception):
    """Invalid configuration: unknown theme, invalid field or block option"""


class BlockError(Exception):
    """Unknown block or failure of a block while rendering"""
