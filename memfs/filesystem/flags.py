"""
Open flags and seek reference points.

Values match the POSIX constants in the os module, so os.O_CREAT or
os.SEEK_END can be passed where an OpenFlag or Whence is expected.
"""

from enum import IntEnum, IntFlag


class OpenFlag(IntFlag):
    """Bit-combinable open-mode directives."""
    # Access mode, exactly one is meaningful per call
    RDONLY = 0
    WRONLY = 0o1
    RDWR = 0o2

    CREATE = 0o100
    TRUNC = 0o1000
    APPEND = 0o2000


class Whence(IntEnum):
    """Reference point for a seek."""
    START = 0
    CURRENT = 1
    END = 2


def has_flag(flags: int, target: int) -> bool:
    """Check that every bit of target is set in flags."""
    return flags & target == target


def describe_flags(flags: int) -> str:
    """Render flags as 'CREATE|TRUNC|RDWR' for log output."""
    names = [
        flag.name for flag in (OpenFlag.CREATE, OpenFlag.TRUNC, OpenFlag.APPEND)
        if has_flag(flags, flag)
    ]
    if has_flag(flags, OpenFlag.RDWR):
        names.append('RDWR')
    elif has_flag(flags, OpenFlag.WRONLY):
        names.append('WRONLY')
    else:
        names.append('RDONLY')
    return '|'.join(names)
