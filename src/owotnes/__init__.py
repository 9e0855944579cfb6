"""
owotnes - stream a NES emulator onto an Our World of Text canvas
"""

__version__ = "0.3.0"
