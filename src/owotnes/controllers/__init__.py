from .command_controller import CommandController
from .controller_pad import UI_PADS, build_pad

__all__ = [
    'CommandController',
    'UI_PADS',
    'build_pad',
]
